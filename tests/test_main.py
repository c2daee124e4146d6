"""
Tests for main.py

**Purpose**: Verify the startup contract: a valid environment prints the
loaded settings and exits 0; a missing or invalid variable exits 1 with a
message naming the offending key.
"""

from main import describe_settings, main
from src.config.settings import AppConfig


def test_describe_settings_receives_config_explicitly():
    config = AppConfig(HOME="/", DESTROY_DATABASE=True, COUNT=2)

    lines = describe_settings(config)

    assert "HOME: /" in lines
    assert "COUNT: 2" in lines
    assert "DESTROY_DATABASE: true (database will be dropped)" in lines


def test_main_success(clean_process_env, capsys):
    clean_process_env.setenv("HOME", "/")
    clean_process_env.setenv("DESTROY_DATABASE", "false")
    clean_process_env.setenv("COUNT", "3")

    exit_code = main([])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Configuration loaded:" in captured.out
    assert "COUNT: 3" in captured.out
    assert "DESTROY_DATABASE: false" in captured.out


def test_main_fails_to_start_on_invalid_value(clean_process_env, capsys):
    clean_process_env.setenv("HOME", "/")
    clean_process_env.setenv("DESTROY_DATABASE", "yes")
    clean_process_env.setenv("COUNT", "3")

    exit_code = main([])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Configuration error: DESTROY_DATABASE" in captured.err
    assert captured.out == ""


def test_main_fails_to_start_on_missing_value(clean_process_env, capsys):
    exit_code = main([])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "HOME is required but not set" in captured.err


def test_main_reads_env_file(clean_process_env, tmp_path, capsys):
    env_file = tmp_path / ".env"
    env_file.write_text("HOME=/from-file\nDESTROY_DATABASE=1\nCOUNT=7\n")

    exit_code = main(["--env-file", str(env_file)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "HOME: /from-file" in captured.out
    assert "COUNT: 7" in captured.out


def test_main_missing_env_file(clean_process_env, tmp_path, capsys):
    exit_code = main(["--env-file", str(tmp_path / "absent.env")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "not found" in captured.err
