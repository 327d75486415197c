from pathlib import Path

import pytest

from porterbuilder.bundle import ManifestConverter
from porterbuilder.bundle.convert import env_name
from porterbuilder.manifest import Manifest, load_manifest
from porterbuilder.protocols import BundleConverterProtocol
from porterbuilder.exceptions import ConversionError

TESTDATA = Path(__file__).parent.parent / "testdata"


def manifest_with(**fields) -> Manifest:
    data = {'name': 'app', 'version': '1.0.0', 'image': 'app:1.0.0'}
    data.update(fields)
    return Manifest.model_validate(data)


class TestManifestConverter:

    def test_satisfies_protocol(self):
        assert isinstance(ManifestConverter(), BundleConverterProtocol)

    def test_starter_manifest(self, fs, write_manifest):
        write_manifest()
        bundle = ManifestConverter().to_bundle(load_manifest(fs), {"porter-hello:latest": "sha256:abc"})

        assert bundle.name == "HELLO"
        assert bundle.version == "0.1.0"
        assert bundle.description == "An example Porter configuration"
        assert bundle.invocation_images[0].image == "porter-hello:latest"
        assert bundle.invocation_images[0].content_digest == "sha256:abc"
        assert bundle.invocation_images[0].image_type == "docker"

        debug = bundle.parameters["porter-debug"]
        assert debug.data_type == "bool"
        assert debug.default_value is False
        assert debug.required is False
        assert debug.destination.env == "PORTER_DEBUG"

    def test_required_flag(self, fs, write_manifest):
        write_manifest(text=(TESTDATA / "paramafest.yaml").read_text())
        bundle = ManifestConverter().to_bundle(load_manifest(fs), {"foo": "digest"})

        assert bundle.parameters["command"].required is False
        assert bundle.parameters["command"].default_value == "echo Hello World"
        assert bundle.parameters["command2"].required is True
        assert bundle.parameters["command2"].default_value is None

    def test_empty_digest_is_omitted(self):
        bundle = ManifestConverter().to_bundle(manifest_with(), {"app:1.0.0": ""})
        assert bundle.invocation_images[0].content_digest is None
        assert "contentDigest" not in bundle.to_dict()["invocationImages"][0]

    def test_destination_defaults_to_upper_snake_env(self):
        manifest = manifest_with(parameters=[
            {'name': 'log-level', 'type': 'string'},
            {'name': 'config', 'type': 'string', 'destination': {'path': '/cnab/app/config.json'}},
        ])
        bundle = ManifestConverter().to_bundle(manifest, {})

        assert bundle.parameters["log-level"].destination.env == "LOG_LEVEL"
        assert bundle.parameters["config"].destination.path == "/cnab/app/config.json"
        assert bundle.parameters["config"].destination.env is None

    def test_credentials_and_actions(self):
        manifest = manifest_with(
            mixins=['exec'],
            credentials=[{'name': 'kubeconfig', 'path': '/root/.kube/config'}, {'name': 'api-token'}],
            customActions={'status': {'description': 'Show status', 'stateless': True, 'steps': [{'exec': {}}]}},
        )
        bundle = ManifestConverter().to_bundle(manifest, {})

        assert bundle.credentials["kubeconfig"].path == "/root/.kube/config"
        assert bundle.credentials["api-token"].env == "API_TOKEN"
        assert bundle.actions["status"].stateless is True
        assert bundle.actions["status"].modifies is False
        assert bundle.actions["status"].description == "Show status"

    def test_unknown_type_raises_error(self):
        manifest = manifest_with(parameters=[{'name': 'p', 'type': 'uuid'}])
        with pytest.raises(ConversionError, match="unsupported type 'uuid'"):
            ManifestConverter().to_bundle(manifest, {})

    @pytest.mark.parametrize(
        "data_type, default",
        [
            ("bool", "false"),
            ("int", True),
            ("int", 1.5),
            ("string", 3),
            ("number", False),
        ],
    )
    def test_mismatched_default_raises_error(self, data_type, default):
        manifest = manifest_with(parameters=[{'name': 'p', 'type': data_type, 'default': default}])
        with pytest.raises(ConversionError, match="is not of type"):
            ManifestConverter().to_bundle(manifest, {})

    @pytest.mark.parametrize(
        "data_type, default",
        [("bool", True), ("int", 3), ("number", 1.5), ("number", 2), ("string", "")],
    )
    def test_matching_default_is_kept(self, data_type, default):
        manifest = manifest_with(parameters=[{'name': 'p', 'type': data_type, 'default': default}])
        bundle = ManifestConverter().to_bundle(manifest, {})
        assert bundle.parameters["p"].default_value == default

    @pytest.mark.parametrize(
        "name, expected",
        [("porter-debug", "PORTER_DEBUG"), ("db.name", "DB_NAME"), ("TOKEN", "TOKEN")],
    )
    def test_env_name(self, name, expected):
        assert env_name(name) == expected
