"""
CLI Tests
Tests for sve_cli (main entry point, commands, io helpers)

Tests:
- keygen writes loadable key files and refuses to overwrite
- sign/verify through files, including the "hello" scenario
- exit codes: 0 valid, 0 invalid (non-strict), 2 invalid (strict), 1 errors
- JSON report and file key source
- config --init / --show
"""
import io
import json

import pytest

from core.crypto.keys import load_private_key, load_public_key
from sve_cli.io import InteractiveInputError, read_message, write_output
from sve_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)

from fixtures.common import RFC8032_TEST1_PUBLIC_HEX, RFC8032_TEST1_SEED_HEX


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run each CLI test in an empty directory with an empty home."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


@pytest.fixture
def key_files(workdir, keypair):
    """Write the fixed test key pair as privkey / pubkey."""
    (workdir / "privkey").write_text(keypair.private_key_hex)
    (workdir / "pubkey").write_text(keypair.public_key_hex)
    return workdir / "pubkey", workdir / "privkey"


@pytest.fixture
def signed_file(workdir, key_files):
    """Sign "hello\\n" through the CLI and return the output path."""
    (workdir / "message.txt").write_bytes(b"hello\n")
    code = main(["sign", "privkey", "--in", "message.txt", "--out", "message.signed"])
    assert code == EXIT_SUCCESS
    return workdir / "message.signed"


class TestParser:
    """Tests for create_parser()."""

    def test_aliases(self):
        parser = create_parser()

        assert parser.parse_args(["gk"]).func.__name__ == "keygen_cmd"
        assert parser.parse_args(["s", "privkey"]).func.__name__ == "sign_cmd"
        assert parser.parse_args(["v"]).func.__name__ == "verify_cmd"

    def test_no_command(self, workdir, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "sve" in capsys.readouterr().out


class TestKeygenCommand:
    """Tests for `sve keygen`."""

    def test_default_paths(self, workdir, capsys):
        code = main(["keygen"])

        assert code == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Key pair generated and saved in pubkey and privkey" in out
        keypair = load_private_key(workdir / "privkey")
        assert load_public_key(workdir / "pubkey") == keypair.public_key

    def test_custom_paths(self, workdir):
        code = main(["keygen", "--public", "a.pub", "--private", "a.key"])

        assert code == EXIT_SUCCESS
        assert (workdir / "a.pub").exists()
        assert (workdir / "a.key").exists()

    def test_refuses_to_overwrite(self, workdir, capsys):
        (workdir / "privkey").write_text("keep me")

        code = main(["keygen"])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error:" in capsys.readouterr().err
        assert (workdir / "privkey").read_text() == "keep me"

    def test_force(self, workdir):
        (workdir / "privkey").write_text("replace me")

        assert main(["keygen", "--force"]) == EXIT_SUCCESS
        assert (workdir / "privkey").read_text() != "replace me"


class TestSignCommand:
    """Tests for `sve sign`."""

    def test_hello_output(self, signed_file):
        message = signed_file.read_bytes()

        assert message.startswith(b"Signature: ")
        assert b"\r\nPublic-Key: " + RFC8032_TEST1_PUBLIC_HEX.encode() + b"\r\n\r\n" in message
        assert message.endswith(b"\r\n\r\nhello\r\n")

    def test_default_key_file(self, workdir, key_files):
        (workdir / "message.txt").write_bytes(b"hello\n")

        code = main(["sign", "--in", "message.txt", "--out", "out.signed"])

        assert code == EXIT_SUCCESS
        assert (workdir / "out.signed").exists()

    def test_seed_only_key_file(self, workdir):
        (workdir / "seed").write_text(RFC8032_TEST1_SEED_HEX + "\n")
        (workdir / "message.txt").write_bytes(b"hello\n")

        code = main(["sign", "seed", "--in", "message.txt", "--out", "out.signed"])

        assert code == EXIT_SUCCESS
        assert RFC8032_TEST1_PUBLIC_HEX.encode() in (workdir / "out.signed").read_bytes()

    def test_missing_key_file(self, workdir, capsys):
        (workdir / "message.txt").write_bytes(b"hello\n")

        code = main(["sign", "nokey", "--in", "message.txt", "--out", "out.signed"])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error:" in capsys.readouterr().err
        assert not (workdir / "out.signed").exists()

    def test_legacy_dialect(self, workdir, key_files):
        (workdir / "message.txt").write_bytes(b"hello\n")

        main(["sign", "--dialect", "legacy", "--in", "message.txt", "--out", "out.signed"])

        assert (workdir / "out.signed").read_bytes().startswith(b"X-Ed25519-Sig: ")


class TestVerifyCommand:
    """Tests for `sve verify`."""

    def test_valid(self, signed_file, capsys):
        code = main(["verify", "--in", str(signed_file)])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "Signature is valid."

    def test_invalid_is_not_an_error(self, signed_file, capsys):
        signed_file.write_bytes(signed_file.read_bytes() + b"!")

        code = main(["verify", "--in", str(signed_file)])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "Signature is not valid."

    def test_invalid_strict(self, signed_file):
        signed_file.write_bytes(signed_file.read_bytes().replace(b"hello", b"jello"))

        assert main(["verify", "--strict", "--in", str(signed_file)]) == EXIT_VERIFICATION_FAILED

    def test_strict_mode_from_config(self, signed_file, workdir):
        (workdir / "sve.json").write_text(json.dumps({"strict_mode": True}))
        signed_file.write_bytes(signed_file.read_bytes() + b"!")

        assert main(["verify", "--in", str(signed_file)]) == EXIT_VERIFICATION_FAILED

    def test_valid_strict(self, signed_file):
        assert main(["verify", "--strict", "--in", str(signed_file)]) == EXIT_SUCCESS

    def test_malformed_message(self, workdir, capsys):
        (workdir / "bad.signed").write_bytes(b"Public-Key: aa\r\nhello\r\n")

        code = main(["verify", "--in", "bad.signed"])

        captured = capsys.readouterr()
        assert code == EXIT_RUNTIME_ERROR
        assert "separator" in captured.err
        assert captured.out == ""

    def test_missing_input_file(self, workdir, capsys):
        assert main(["verify", "--in", "missing.signed"]) == EXIT_RUNTIME_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_json_report(self, signed_file, capsys):
        code = main(["verify", "--json", "--in", str(signed_file)])

        report = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert report["valid"] is True
        assert report["key_source"] == "embedded"
        assert report["public_key"] == RFC8032_TEST1_PUBLIC_HEX

    def test_json_report_invalid(self, signed_file, capsys):
        signed_file.write_bytes(signed_file.read_bytes() + b"!")

        main(["verify", "--json", "--in", str(signed_file)])

        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is False
        assert report["errors"] == ["Signature is not valid"]

    def test_debug_lists_checks(self, signed_file, capsys):
        main(["verify", "--debug", "--in", str(signed_file)])

        out = capsys.readouterr().out
        assert "✓ signature_header" in out
        assert "✓ signature_valid" in out

    def test_public_key_file(self, signed_file, key_files):
        public_path, _ = key_files

        assert main(["verify", "--public-key", str(public_path), "--in", str(signed_file)]) == EXIT_SUCCESS

    def test_public_key_file_other_key(self, signed_file, workdir, other_keypair, capsys):
        (workdir / "other.pub").write_text(other_keypair.public_key_hex)

        code = main(["verify", "--strict", "--public-key", "other.pub", "--in", str(signed_file)])

        assert code == EXIT_VERIFICATION_FAILED
        assert "Signature is not valid." in capsys.readouterr().out

    def test_key_source_file_from_env(self, signed_file, key_files, monkeypatch, capsys):
        monkeypatch.setenv("SVE_KEY_SOURCE", "file")

        code = main(["verify", "--json", "--in", str(signed_file)])

        assert code == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["key_source"] == "file"

    def test_missing_public_key_file(self, signed_file, capsys):
        code = main(["verify", "--public-key", "missing.pub", "--in", str(signed_file)])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error:" in capsys.readouterr().err


class TestConfigCommand:
    """Tests for `sve config`."""

    def test_init_and_show(self, workdir, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (workdir / "sve.json").exists()
        capsys.readouterr()

        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["line_ending_policy"] == "normalize"
        assert shown["strict_mode"] is False

    def test_init_refuses_existing(self, workdir):
        (workdir / "sve.json").write_text("{}")

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_null_log_level_uses_default(self, workdir, capsys):
        (workdir / "sve.json").write_text(json.dumps({"log_level": None, "log_file": None}))

        assert main(["config", "--show"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["log_level"] == "WARNING"

    def test_unwritable_log_file(self, workdir, capsys):
        (workdir / "sve.json").write_text(json.dumps({"log_file": str(workdir / "no" / "dir" / "sve.log")}))

        assert main(["config", "--show"]) == EXIT_RUNTIME_ERROR
        assert "Error configuring logging" in capsys.readouterr().err

    def test_yaml_config_file(self, signed_file, workdir):
        (workdir / "sve.yaml").write_text("strict_mode: true\n")
        signed_file.write_bytes(signed_file.read_bytes() + b"!")

        assert main(["verify", "--in", str(signed_file)]) == EXIT_VERIFICATION_FAILED

    def test_bad_config_file(self, workdir, capsys):
        (workdir / "sve.json").write_text("{not json")

        assert main(["config", "--show"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err


class TestIO:
    """Tests for sve_cli.io helpers."""

    class _Terminal(io.BytesIO):
        def isatty(self):
            return True

    def test_read_from_stream(self):
        assert read_message(stdin=io.BytesIO(b"data")) == b"data"

    def test_dash_means_stdin(self):
        assert read_message("-", stdin=io.BytesIO(b"data")) == b"data"

    def test_refuses_terminal(self):
        with pytest.raises(InteractiveInputError):
            read_message(stdin=self._Terminal(b""), require_pipe=True)

    def test_terminal_allowed_without_require_pipe(self):
        assert read_message(stdin=self._Terminal(b"typed")) == b"typed"

    def test_write_output_bytes_untouched(self, tmp_path):
        stream = io.BytesIO()
        write_output(b"a\r\nb\n", stdout=stream)
        write_output(b"a\r\nb\n", str(tmp_path / "out"))

        assert stream.getvalue() == b"a\r\nb\n"
        assert (tmp_path / "out").read_bytes() == b"a\r\nb\n"
