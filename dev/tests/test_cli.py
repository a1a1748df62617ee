from __future__ import annotations

import json
import os

from qatch.cli import BAD_COMBINED_FORMAT, FIND_WITHOUT_REPLACE, main, parse_arguments


def test_parse_keeps_pair_order() -> None:
    args = parse_arguments(["-t", "x.bin", "-fr", "0102:0304", "-f", "0506", "-r", "0708", "--find-replace", "AA:BB"])
    assert args.target == "x.bin"
    assert args.pairs == [("0102", "0304"), ("0506", "0708"), ("AA", "BB")]
    assert args.arg_errors == []


def test_parse_combined_splits_on_first_colon() -> None:
    args = parse_arguments(["-fr", "41:42:43:44"])
    assert args.pairs == [("41", "42:43:44")]


def test_parse_combined_without_colon() -> None:
    args = parse_arguments(["-fr", "4142"])
    assert args.pairs == []
    assert args.arg_errors == [BAD_COMBINED_FORMAT]


def test_parse_find_without_replace() -> None:
    args = parse_arguments(["-f", "4142"])
    assert args.pairs == []
    assert args.arg_errors == [FIND_WITHOUT_REPLACE]

    args = parse_arguments(["-f", "4142", "-f", "4344", "-r", "4546"])
    assert args.pairs == [("4344", "4546")]
    assert args.arg_errors == [FIND_WITHOUT_REPLACE]


def test_parse_is_fresh_per_call() -> None:
    parse_arguments(["-fr", "01:02"])
    assert parse_arguments(["-t", "x"]).pairs == []


def test_main_patches_file(target_file, capsys) -> None:
    rc = main(["--target", str(target_file), "--find-replace", "4142:4344"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert target_file.read_bytes() == bytes([0x10, 0x43, 0x44, 0x43, 0x44, 0x20])
    assert out == ["Replaced 2 instances of 4142", "File successfully patched"]


def test_main_backup(target_file, capsys) -> None:
    original = target_file.read_bytes()
    rc = main(["-t", str(target_file), "-b", "-f", "41 42", "-r", "43 44"])
    out = capsys.readouterr().out.splitlines()

    backup = target_file.with_name("target.bin.BAK")
    assert rc == 0
    assert backup.read_bytes() == original
    assert out[0] == f"Created backup: {backup}"
    assert target_file.read_bytes() != original


def test_main_no_changes(target_file, capsys) -> None:
    original = target_file.read_bytes()
    rc = main(["-t", str(target_file), "-fr", "DEAD:BEEF", "-fr", "AABB:AA"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert out == [
        "Pattern not found: DEAD",
        "Pattern length mismatch: AABB (2) vs AA (1)",
        "No changes made",
    ]
    assert target_file.read_bytes() == original


def test_main_dry_run_does_not_write(target_file, capsys) -> None:
    original = target_file.read_bytes()
    rc = main(["-t", str(target_file), "-b", "--dry-run", "-fr", "4142:4344"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert target_file.read_bytes() == original
    assert not target_file.with_name("target.bin.BAK").exists()
    assert out[-1] == "Dry run: changes not written"


def test_main_requires_target(capsys) -> None:
    assert main(["-fr", "4142:4344"]) == 1
    assert "Error: Target path is required" in capsys.readouterr().out


def test_main_requires_patterns(target_file, capsys) -> None:
    assert main(["-t", str(target_file)]) == 1
    assert "Error: At least one find-replace pattern required" in capsys.readouterr().out


def test_main_reports_bad_combined_and_missing_pairs(target_file, capsys) -> None:
    assert main(["-t", str(target_file), "-fr", "4142"]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out == [f"Error: {BAD_COMBINED_FORMAT}", "Error: At least one find-replace pattern required"]


def test_main_missing_file(tmp_path, capsys) -> None:
    missing = tmp_path / "missing.bin"
    assert main(["-t", str(missing), "-fr", "4142:4344"]) == 1
    assert f"Error: File not found - {missing}" in capsys.readouterr().out


def test_main_report_json(target_file, tmp_path, capsys) -> None:
    report_path = tmp_path / "reports" / "run.json"
    rc = main(["-t", str(target_file), "-fr", "4142:4344", "--report-json", str(report_path)])
    capsys.readouterr()

    assert rc == 0
    payload = json.loads(report_path.read_text(encoding="utf-8"))
    assert payload["target"] == str(target_file)
    assert payload["written"] is True
    assert payload["results"][0]["offsets"] == [1, 3]


def test_main_uses_config_patches(target_file, tmp_path, capsys) -> None:
    config_path = tmp_path / "qatch.json"
    config_path.write_text(json.dumps({
        "backup": {"enabled": True, "suffix": ".orig"},
        "patches": [{"find": "4344", "replace": "5152"}],
    }), encoding="utf-8")

    rc = main(["-t", str(target_file), "-c", str(config_path), "-fr", "4142:4344"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert target_file.with_name("target.bin.orig").exists()
    assert out[1:] == [
        "Replaced 2 instances of 4142",
        "Replaced 2 instances of 4344",
        "File successfully patched",
    ]
    assert target_file.read_bytes() == bytes([0x10, 0x51, 0x52, 0x51, 0x52, 0x20])


def test_main_invalid_config(target_file, tmp_path, capsys) -> None:
    config_path = tmp_path / "qatch.json"
    config_path.write_text('{"backup": {"enabled": "yes"}}', encoding="utf-8")

    assert main(["-t", str(target_file), "-c", str(config_path), "-fr", "4142:4344"]) == 1
    assert capsys.readouterr().out.startswith("Error: Invalid config")


def test_main_no_arguments_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: qatch" in capsys.readouterr().out


def test_main_version(capsys) -> None:
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("Qatch v")


def test_main_patches_through_symlink(target_file, capsys) -> None:
    link = target_file.with_name("link.bin")
    os.symlink(target_file, link)

    assert main(["-t", str(link), "-fr", "4142:4344"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "File successfully patched"
    assert link.is_symlink()
    assert target_file.read_bytes() == bytes([0x10, 0x43, 0x44, 0x43, 0x44, 0x20])


def test_main_unusable_log_file(target_file, tmp_path, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    config_path = tmp_path / "qatch.json"
    config_path.write_text(json.dumps({"logging": {"file": str(blocker / "qatch.log")}}), encoding="utf-8")

    assert main(["-t", str(target_file), "-c", str(config_path), "-fr", "4142:4344"]) == 1
    assert capsys.readouterr().out.startswith("Error: Cannot open log file")
    assert target_file.read_bytes()[1] == 0x41
