class PorterBuilderError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to loading and parsing the manifest ---
class ConfigurationError(PorterBuilderError):
    """Base class for errors encountered while finding, reading, or parsing config files."""

    pass


class ManifestLoadError(ConfigurationError):
    """Base class for errors raised while loading the manifest."""

    pass


class ManifestFileMissingError(ManifestLoadError):
    """Raised when the manifest file cannot be found."""

    pass


class ManifestParsingError(ManifestLoadError):
    """Raised when the manifest is syntactically incorrect YAML."""

    pass


class ManifestValidationError(ManifestLoadError):
    """Raised when the manifest fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors that occur during the build pipeline ---
class BuildError(PorterBuilderError):
    """Base class for errors that occur while producing build artifacts."""

    pass


class FilesystemPrepError(BuildError):
    """Raised when a runtime or mixin binary cannot be staged into the build context."""

    pass


class TemplateReadError(BuildError):
    """Raised when a custom Dockerfile template is declared but cannot be read."""

    pass


class GenerationError(BuildError):
    """Raised when the generated Dockerfile cannot be written."""

    pass


class ExternalBuildError(BuildError):
    """Raised when the image builder reports a failure."""

    pass


class ConversionError(BuildError):
    """Raised when the manifest cannot be converted into a bundle descriptor."""

    pass


class BundleWriteError(BuildError):
    """Raised when the bundle descriptor cannot be written."""

    pass


# Short names used by the build stages
FilesystemError = FilesystemPrepError
TemplateError = TemplateReadError
BuildFailure = ExternalBuildError
WriteError = BundleWriteError


# --- 3. Errors related to IO operations ---
class PorterIOError(PorterBuilderError):
    """Base class for IO-related errors."""

    pass


class PathExistsError(PorterIOError):
    """Raised when a file or directory already exists."""

    pass


class PathNotFoundError(PorterIOError):
    """Raised when a file or directory is not found."""

    pass


class NotAFileError(PorterIOError):
    """Raised when a file is expected, but a directory is found."""

    pass


class NotADirError(PorterIOError):
    """Raised when a directory is expected, but a file is found."""

    pass
