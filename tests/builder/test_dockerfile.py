import pytest

from porterbuilder.builder import DockerfileGenerator, DockerfileTrailer
from porterbuilder.datacls import BuildContext
from porterbuilder.manifest import load_manifest
from porterbuilder.exceptions import TemplateReadError, GenerationError

DEFAULT_LINES = [
    "FROM quay.io/deis/lightweight-docker-go:v0.2.0",
    "FROM debian:stretch",
    "COPY --from=0 /etc/ssl/certs/ca-certificates.crt /etc/ssl/certs/ca-certificates.crt",
    "COPY cnab/ /cnab/",
    "COPY porter.yaml /cnab/app/porter.yaml",
    'CMD ["/cnab/app/run"]',
]

TRAILER = DEFAULT_LINES[-3:]


class TestBuildLines:

    def test_default_template(self, make_context):
        gotlines = DockerfileGenerator(make_context()).build_lines()
        assert gotlines == DEFAULT_LINES

    def test_default_template_is_deterministic(self, make_context):
        context = make_context()
        first = DockerfileGenerator(context).build_lines()
        second = DockerfileGenerator(context).build_lines()
        assert first == second

    def test_base_image_and_build_instructions(self, make_context):
        context = make_context({
            'name': 'app', 'version': '1.0.0', 'image': 'app:1.0.0',
            'baseImage': 'ubuntu:22.04',
            'build': ['RUN apt-get update && apt-get install -y curl', 'ENV APP_MODE=bundle'],
        })
        gotlines = DockerfileGenerator(context).build_lines()

        assert gotlines == [
            "FROM quay.io/deis/lightweight-docker-go:v0.2.0",
            "FROM ubuntu:22.04",
            "COPY --from=0 /etc/ssl/certs/ca-certificates.crt /etc/ssl/certs/ca-certificates.crt",
            "RUN apt-get update && apt-get install -y curl",
            "ENV APP_MODE=bundle",
            *TRAILER,
        ]

    def test_custom_template_is_kept_verbatim(self, fs, make_context):
        fs.write_text("Dockerfile.template", "FROM ubuntu:latest\nCOPY mybin /cnab/app/\n\n")
        context = make_context({
            'name': 'app', 'version': '1.0.0', 'image': 'app:1.0.0',
            'dockerfile': 'Dockerfile.template',
            'build': ['RUN ignored-for-custom-templates'],
        })
        gotlines = DockerfileGenerator(context).build_lines()

        assert gotlines == [
            "FROM ubuntu:latest",
            "COPY mybin /cnab/app/",
            "",
            *TRAILER,
        ]

    def test_custom_template_splits_on_newlines_only(self, fs, make_context):
        template = "FROM alpine\r\n# page\x0cbreak\n\nRUN echo a b\x1ec\n"
        fs.write_bytes("Dockerfile.template", template.encode("utf-8"))
        context = make_context({
            'name': 'app', 'version': '1.0.0', 'image': 'app:1.0.0',
            'dockerfile': 'Dockerfile.template',
        })
        gotlines = DockerfileGenerator(context).build_lines()

        assert gotlines == [
            "FROM alpine",
            "# page\x0cbreak",
            "",
            "RUN echo a b\x1ec",
            *TRAILER,
        ]

    def test_missing_custom_template_raises_error(self, fs, make_context):
        context = make_context({
            'name': 'app', 'version': '1.0.0', 'image': 'app:1.0.0',
            'dockerfile': 'Dockerfile.missing',
        })
        with pytest.raises(TemplateReadError, match="Dockerfile.missing"):
            DockerfileGenerator(context).generate()
        assert not fs.exists("Dockerfile"), "Dockerfile was written for an unreadable template"

    def test_custom_trailer(self, make_context):
        trailer = DockerfileTrailer(context_dir="bundle", manifest_file="app.yaml", command=["/cnab/app/run", "--debug"])
        gotlines = DockerfileGenerator(make_context(), trailer=trailer).build_lines()

        assert gotlines[-3:] == [
            "COPY bundle/ /cnab/",
            "COPY app.yaml /cnab/app/app.yaml",
            'CMD ["/cnab/app/run", "--debug"]',
        ]

    def test_nested_manifest_is_copied_from_its_path(self, fs, tool):
        fs.write_text("app/porter.yaml", "name: app\nversion: 1.0.0\nimage: app:1.0.0\n")
        context = BuildContext(
            fs=fs,
            manifest=load_manifest(fs, "app/porter.yaml"),
            tool=tool,
            manifest_path="app/porter.yaml",
        )
        gotlines = DockerfileGenerator(context).build_lines()

        assert gotlines[-2] == "COPY app/porter.yaml /cnab/app/porter.yaml"


class TestGenerate:

    def test_writes_dockerfile(self, fs, make_context):
        lines = DockerfileGenerator(make_context()).generate()

        assert fs.is_file("Dockerfile"), "Dockerfile wasn't written"
        assert fs.read_text("Dockerfile").splitlines() == lines

    def test_output(self, make_context, capsys):
        DockerfileGenerator(make_context()).generate()

        wantlines = "\nGenerating Dockerfile =======>\n" + "\n".join(DEFAULT_LINES) + "\n"
        assert capsys.readouterr().out == wantlines

    def test_write_failure_raises_error(self, disk_fs, tmp_path):
        (tmp_path / "work" / "porter.yaml").write_text("name: x\nversion: 1.0.0\nimage: x:1\n")
        (tmp_path / "work" / "Dockerfile").mkdir()
        context = BuildContext(fs=disk_fs, manifest=load_manifest(disk_fs))

        with pytest.raises(GenerationError, match="error writing Dockerfile"):
            DockerfileGenerator(context).generate()
