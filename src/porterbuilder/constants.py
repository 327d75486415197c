from enum import Enum

# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "build": "porterbuilder.builder.build",
    "bld": "porterbuilder.builder.build",
    "gen": "porterbuilder.builder.dockerfile",
    "dockerfile": "porterbuilder.builder.dockerfile",
    "prep": "porterbuilder.builder.prepare",
    "prepare": "porterbuilder.builder.prepare",
    "docker": "porterbuilder.builder.docker",
    "conv": "porterbuilder.bundle.convert",
    "convert": "porterbuilder.bundle.convert",
    "writer": "porterbuilder.bundle.writer",
    "io": "porterbuilder.io",
    "fs": "porterbuilder.io.fs",
    "man": "porterbuilder.manifest",
    "conf": "porterbuilder.config",
}

# Top-level modules within porterbuilder for auto-prefixing
KNOWN_TOP_MODULES = {
    "builder",
    "bundle",
    "io",
    "datacls",
    "utils",
    "exceptions",
    "config",
    "manifest",
    "scaffold",
}

LOG_LEVELS_ENV = "PORTERB_LOG_LEVELS"


# --- Filenames and Paths ---
MANIFEST_FILENAME = "porter.yaml"
DOCKERFILE_NAME = "Dockerfile"
LOCAL_BUNDLE = "bundle.json"

# Build context layout, relative to the working directory
BUILD_CONTEXT_DIR = "cnab"
APP_DIR = "cnab/app"
MIXINS_DIR = "cnab/app/mixins"

# Tool home layout
DEFAULT_HOME = "~/.porter"
HOME_MIXINS_DIR = "mixins"
RUNTIME_SUFFIX = "-runtime"
RUNTIME_BINARY = "porter-runtime"

# --- Dockerfile ---
DOCKERFILE_BANNER = "Generating Dockerfile =======>"
DEFAULT_BASE_IMAGE = "debian:stretch"
DEFAULT_TEMPLATE = "Dockerfile.tmpl"
IMAGE_APP_ROOT = "/cnab/app"
IMAGE_CNAB_ROOT = "/cnab/"
RUN_SCRIPT = "/cnab/app/run"

# --- Bundle ---
CNAB_SCHEMA_VERSION = "v1.0.0-WD"
INVOCATION_IMAGE_TYPE = "docker"

# Core actions every bundle supports implicitly
CORE_ACTIONS = ("install", "upgrade", "uninstall")


class ParameterType(str, Enum):
    STRING = "string"
    INT = "int"
    INTEGER = "integer"
    NUMBER = "number"
    BOOL = "bool"
    BOOLEAN = "boolean"


# Python types accepted as a default value for each parameter type
PARAMETER_PY_TYPES = {
    ParameterType.STRING: (str,),
    ParameterType.INT: (int,),
    ParameterType.INTEGER: (int,),
    ParameterType.NUMBER: (int, float),
    ParameterType.BOOL: (bool,),
    ParameterType.BOOLEAN: (bool,),
}
