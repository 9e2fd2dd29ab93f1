"""Tests for the command-line entry point."""

import json

import pytest
import yaml

from tseo_gen.__main__ import main


@pytest.fixture
def spec_file(tmp_path, pet_store):
    path = tmp_path / "openapi.yml"
    path.write_text(yaml.safe_dump(pet_store, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def dirs(tmp_path):
    return str(tmp_path / "out" / "api"), str(tmp_path / "out" / "routes")


class TestHelp:

    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == 0
        assert "usage: tseo-gen" in capsys.readouterr().out

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_exits_zero(self, flag, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([flag])
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "-da" in out
        assert "-dr" in out


class TestGeneration:

    def test_generates_all_units(self, spec_file, dirs, tmp_path):
        api_dir, routes_dir = dirs
        assert main([str(spec_file), "-da", api_dir, "-dr", routes_dir]) == 0

        api = tmp_path / "out" / "api"
        routes = tmp_path / "out" / "routes"
        assert sorted(p.name for p in api.iterdir()) == [
            "GeneratedController.ts", "PetsAPIDelegate.ts", "StoreAPIDelegate.ts", "index.ts",
        ]
        assert sorted(p.name for p in routes.iterdir()) == [
            "GeneratedRouter.ts", "PetsRouter.ts", "StoreRouter.ts", "index.ts",
        ]
        router = (routes / "PetsRouter.ts").read_text(encoding="utf-8")
        assert "from '../api/GeneratedController';" in router

    def test_base_name(self, spec_file, dirs, tmp_path):
        api_dir, routes_dir = dirs
        assert main([str(spec_file), "-b", "Petstore", "-da", api_dir, "-dr", routes_dir]) == 0
        assert (tmp_path / "out" / "api" / "PetstoreController.ts").exists()
        assert (tmp_path / "out" / "routes" / "PetstoreRouter.ts").exists()

    def test_missing_flag_value_uses_default(self, spec_file, dirs, tmp_path, capsys):
        api_dir, routes_dir = dirs
        assert main([str(spec_file), "-da", api_dir, "-dr", routes_dir, "-b"]) == 0
        assert "-b requires an argument." in capsys.readouterr().out
        assert (tmp_path / "out" / "api" / "GeneratedController.ts").exists()

    def test_json_document(self, tmp_path, pet_store, dirs):
        path = tmp_path / "openapi.json"
        path.write_text(json.dumps(pet_store), encoding="utf-8")
        api_dir, routes_dir = dirs
        assert main([str(path), "-da", api_dir, "-dr", routes_dir]) == 0
        assert (tmp_path / "out" / "api" / "PetsAPIDelegate.ts").exists()

    def test_rerun_is_byte_identical(self, spec_file, dirs, tmp_path):
        api_dir, routes_dir = dirs
        main([str(spec_file), "-da", api_dir, "-dr", routes_dir])
        first = {p.name: p.read_bytes() for p in (tmp_path / "out").rglob("*.ts")}
        main([str(spec_file), "-da", api_dir, "-dr", routes_dir])
        second = {p.name: p.read_bytes() for p in (tmp_path / "out").rglob("*.ts")}
        assert first == second


class TestFailures:

    def test_missing_document(self, tmp_path, dirs):
        api_dir, routes_dir = dirs
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "nope.yml"), "-da", api_dir, "-dr", routes_dir])
        assert exc_info.value.code
        assert str(exc_info.value.code).startswith("error:")

    def test_malformed_document(self, tmp_path, dirs):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        api_dir, routes_dir = dirs
        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "-da", api_dir, "-dr", routes_dir])
        assert "Invalid JSON" in str(exc_info.value.code)

    def test_unwritable_output(self, spec_file, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([str(spec_file), "-da", str(blocker), "-dr", str(tmp_path / "routes")])
        assert exc_info.value.code
