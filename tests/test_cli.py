# tests/test_cli.py
"""
Tests for CLI interface
"""
import json
import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from lticart.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    """Tests for CLI commands"""

    def test_cli_help(self, runner):
        """Should show help message"""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert "LtiCart" in result.output

    def test_version_command(self, runner):
        """Should show version"""
        result = runner.invoke(cli, ['version'])
        assert result.exit_code == 0
        assert "LtiCart CLI v1.0.0" in result.output


class TestBuild:
    """Tests for lticart build"""

    def test_build_default_location(self, runner, simple_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.json'])

            assert result.exit_code == 0, result.output
            assert Path("output/course/imsmanifest.xml").is_file()
            assert Path("output/course/i_103/basiclti.xml").is_file()
            assert Path("output/course.imscc").is_file()
            assert "[v] 1 resources written" in result.output
            assert "Packaged as" in result.output

    def test_build_no_package(self, runner, simple_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.json', '-o', 'out/c/imsmanifest.xml', '--no-package'])

            assert result.exit_code == 0, result.output
            assert Path("out/c/imsmanifest.xml").is_file()
            assert not Path("out/c.imscc").exists()
            assert "Packaged as" not in result.output

    def test_build_uses_config_file(self, runner, simple_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")
            Path("lticart.yaml").write_text("output_dir: dist\npackage: false\n", encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.json'])

            assert result.exit_code == 0, result.output
            assert Path("dist/course/imsmanifest.xml").is_file()
            assert not Path("dist/course.imscc").exists()

    def test_build_random_strategy(self, runner, simple_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.json', '--strategy', 'random', '--no-package'])

            assert result.exit_code == 0, result.output
            manifest = Path("output/course/imsmanifest.xml").read_text(encoding="utf-8")
            assert 'identifier="M_100"' not in manifest

    def test_build_without_assessments(self, runner, assessment_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(assessment_course), encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.json', '--no-split-assessments'])

            assert result.exit_code == 0, result.output
            assert "[v] 3 resources written" in result.output
            with zipfile.ZipFile("output/course.imscc") as zf:
                assert not any(n.endswith("lti_advantage.xml") for n in zf.namelist())

    def test_package_flag_overrides_config(self, runner, simple_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")
            Path("lticart.yaml").write_text("package: false\n", encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.json', '--package'])

            assert result.exit_code == 0, result.output
            assert Path("output/course.imscc").is_file()

    def test_package_manifest_in_current_folder(self, runner, simple_course, tmp_path, monkeypatch):
        workdir = tmp_path / "cartridge"
        workdir.mkdir()
        monkeypatch.chdir(workdir)
        Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")

        result = runner.invoke(cli, ['build', 'course.json', '-o', 'imsmanifest.xml', '--package'])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "cartridge.imscc").is_file()

    def test_structural_error(self, runner):
        with runner.isolated_filesystem():
            Path("course.yaml").write_text("title: x\nmodules:\n  - title: broken\n", encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.yaml'])

            assert result.exit_code == 1
            assert "modules[0]" in result.output
            assert not Path("output/course").exists()

    def test_bad_config(self, runner, simple_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")
            Path("lticart.yaml").write_text("id_strategy: sequential\n", encoding="utf-8")
            result = runner.invoke(cli, ['build', 'course.json'])
            assert result.exit_code == 1


class TestVerify:
    """Tests for lticart verify"""

    def test_verify_good_package(self, runner, assessment_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(assessment_course), encoding="utf-8")
            runner.invoke(cli, ['build', 'course.json'])
            result = runner.invoke(cli, ['verify', 'output/course.imscc'])

            assert result.exit_code == 0, result.output
            assert "[*] 7 items, 5 resources" in result.output
            assert "[v] No problems found" in result.output

    def test_verify_broken_folder(self, runner, simple_course):
        with runner.isolated_filesystem():
            Path("course.json").write_text(json.dumps(simple_course), encoding="utf-8")
            runner.invoke(cli, ['build', 'course.json', '--no-package'])
            Path("output/course/i_103/basiclti.xml").unlink()
            result = runner.invoke(cli, ['verify', 'output/course'])

            assert result.exit_code == 1
            assert "[x] Missing file i_103/basiclti.xml" in result.output

    def test_verify_no_manifest(self, runner):
        with runner.isolated_filesystem():
            Path("empty").mkdir()
            result = runner.invoke(cli, ['verify', 'empty'])
            assert result.exit_code == 1

    def test_verify_corrupt_archive(self, runner):
        with runner.isolated_filesystem():
            Path("broken.imscc").write_bytes(b"not a zip")
            result = runner.invoke(cli, ['verify', 'broken.imscc'])

            assert result.exit_code == 1
            assert isinstance(result.exception, SystemExit)
            assert "CourseFileError" in result.output


class TestInit:
    """Tests for lticart init"""

    def test_init_creates_template(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ['init'])
            assert result.exit_code == 0
            assert Path("lticart.yaml").read_text(encoding="utf-8").startswith("# LtiCart Configuration File")

    def test_init_keeps_existing(self, runner):
        with runner.isolated_filesystem():
            Path("lticart.yaml").write_text("package: false\n", encoding="utf-8")
            result = runner.invoke(cli, ['init'])

            assert "already exists" in result.output
            assert Path("lticart.yaml").read_text(encoding="utf-8") == "package: false\n"

            result = runner.invoke(cli, ['init', '--force'])
            assert result.exit_code == 0
            assert "id_strategy: monotonic" in Path("lticart.yaml").read_text(encoding="utf-8")
