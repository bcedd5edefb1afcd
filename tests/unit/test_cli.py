"""
CLI Unit Tests
Tests for authtree_cli/

Drives main() end to end against a file store in a temporary directory:
1. init / root
2. set and get with proof output
3. verify exit codes (valid, tampered, unreadable)
4. config command
"""
import json

import pytest

from authtree.crypto.hashing import sha256, to_hex

from authtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from authtree_cli.main import create_parser, main

from fixtures.trees import leaf_value


@pytest.fixture(autouse=True)
def in_tmp_cwd(tmp_path, monkeypatch):
    """Run every CLI test from an empty directory so no config file is found."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store(tmp_path):
    return str(tmp_path / "store")


@pytest.fixture
def initialised(store, capsys):
    assert main(["--store", store, "init", "--depth", "3"]) == EXIT_SUCCESS
    capsys.readouterr()
    return store


def _run_json(capsys, argv):
    code = main(argv)
    out = capsys.readouterr().out
    return code, json.loads(out)


class TestParser:
    """Argument parsing."""

    def test_subcommands(self):
        parser = create_parser()
        args = parser.parse_args(["set", "7", "0x00", "--raw", "--json"])
        assert args.command == "set"
        assert args.index == 7
        assert args.raw
        assert args.json

    def test_depth_bounds(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["init", "--depth", "40"])

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR


class TestInitAndRoot:
    """Creating a store and reading its root."""

    def test_init(self, store, capsys):
        code, data = _run_json(capsys, ["--store", store, "init", "--depth", "3", "--json"])
        assert code == EXIT_SUCCESS
        assert data["depth"] == 3
        assert data["hasher"] == "sha256"

    def test_init_twice_fails(self, initialised, capsys):
        assert main(["--store", initialised, "init"]) == EXIT_RUNTIME_ERROR
        assert "already exists" in capsys.readouterr().err

    def test_root_of_fresh_store(self, initialised, capsys):
        code, data = _run_json(capsys, ["--store", initialised, "root", "--json"])
        assert code == EXIT_SUCCESS
        assert data["is_default"] is True
        assert data["leaves"] == 8

    def test_commands_before_init_fail(self, store, capsys):
        assert main(["--store", store, "root"]) == EXIT_RUNTIME_ERROR
        assert "authtree init" in capsys.readouterr().err

    def test_store_from_env(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("AUTHTREE_STORE", str(tmp_path / "envstore"))
        assert main(["init", "--depth", "2"]) == EXIT_SUCCESS
        assert (tmp_path / "envstore" / "meta.json").exists()


class TestLeafCommands:
    """get and set."""

    def test_set_then_get(self, initialised, capsys):
        value = to_hex(leaf_value(0x11))
        code, written = _run_json(capsys, ["--store", initialised, "set", "8", value, "--json"])
        assert code == EXIT_SUCCESS
        assert written["value"] == value
        assert written["proof"]["index"] == 8

        code, read = _run_json(capsys, ["--store", initialised, "get", "1", "--offset", "--json"])
        assert code == EXIT_SUCCESS
        assert read["index"] == 8
        assert read["value"] == value
        assert read["root"] == written["root"]

        code, root = _run_json(capsys, ["--store", initialised, "root", "--json"])
        assert root["root"] == written["root"]
        assert root["is_default"] is False

    def test_set_raw_hashes_payload(self, initialised, capsys):
        payload = leaf_value(1) + leaf_value(2)
        code, data = _run_json(
            capsys, ["--store", initialised, "set", "7", to_hex(payload), "--raw", "--json"]
        )
        assert code == EXIT_SUCCESS
        assert data["value"] == to_hex(sha256(payload))

    def test_set_internal_index_fails(self, initialised, capsys):
        assert main(["--store", initialised, "set", "3", to_hex(leaf_value(1))]) == EXIT_RUNTIME_ERROR
        assert "INVALID_LEAF_INDEX" in capsys.readouterr().err

    def test_set_bad_hex_fails(self, initialised):
        assert main(["--store", initialised, "set", "7", "xyz"]) == EXIT_RUNTIME_ERROR

    def test_set_short_value_fails(self, initialised, capsys):
        assert main(["--store", initialised, "set", "7", "0x01"]) == EXIT_RUNTIME_ERROR
        assert "INVALID_ARGUMENT" in capsys.readouterr().err

    def test_get_writes_proof_file(self, initialised, tmp_path, capsys):
        out = tmp_path / "proofs" / "leaf.json"
        assert main(["--store", initialised, "get", "10", "--out", str(out)]) == EXIT_SUCCESS
        doc = json.loads(out.read_text())
        assert doc["index"] == 10
        assert len(doc["assist"]) == 3
        assert "proof written to" in capsys.readouterr().out


class TestVerifyCommand:
    """Offline verification exit codes."""

    @pytest.fixture
    def proof_file(self, initialised, tmp_path, capsys):
        out = tmp_path / "proof.json"
        main(["--store", initialised, "set", "12", to_hex(leaf_value(7)), "--out", str(out)])
        capsys.readouterr()
        return out

    def test_valid_proof(self, proof_file, capsys):
        code, data = _run_json(capsys, ["verify", str(proof_file), "--json"])
        assert code == EXIT_SUCCESS
        assert data["valid"] is True
        assert "errors" not in data

    def test_expected_root(self, proof_file, capsys):
        root = json.loads(proof_file.read_text())["root"]
        assert main(["verify", str(proof_file), "--root", root]) == EXIT_SUCCESS
        capsys.readouterr()
        assert main(["verify", str(proof_file), "--root", to_hex(leaf_value(0))]) == EXIT_VERIFICATION_FAILED

    def test_tampered_proof(self, proof_file, capsys):
        doc = json.loads(proof_file.read_text())
        doc["source"] = to_hex(leaf_value(8))
        proof_file.write_text(json.dumps(doc))

        code, data = _run_json(capsys, ["verify", str(proof_file), "--json"])
        assert code == EXIT_VERIFICATION_FAILED
        assert data["valid"] is False

    def test_wrong_assist_length(self, proof_file, capsys):
        doc = json.loads(proof_file.read_text())
        doc["assist"] = doc["assist"][1:]
        proof_file.write_text(json.dumps(doc))

        code, data = _run_json(capsys, ["verify", str(proof_file), "--json"])
        assert code == EXIT_VERIFICATION_FAILED
        assert any("INVALID_DEPTH" in e for e in data["errors"])

    def test_missing_file(self, tmp_path):
        assert main(["verify", str(tmp_path / "none.json")]) == EXIT_RUNTIME_ERROR

    def test_malformed_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"index": 7}))
        assert main(["verify", str(path)]) == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    """config --init / --show."""

    def test_init_creates_template(self, tmp_path, capsys):
        path = tmp_path / "authtree.json"
        assert main(["config", "--init", "--path", str(path)]) == EXIT_SUCCESS
        assert json.loads(path.read_text())["tree"]["depth"] == 20
        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR

    def test_show_reflects_overrides(self, capsys):
        code, data = _run_json(capsys, ["--store", "elsewhere", "config", "--show"])
        assert code == EXIT_SUCCESS
        assert data["tree"]["store_path"] == "elsewhere"
