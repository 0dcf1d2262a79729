from multiai.logger import REDACTION_MARKER, get_logger, mask_sensitive, setup_logging


def test_runs_of_twenty_or_more_token_chars_are_redacted() -> None:
    assert mask_sensitive("key " + "a" * 20) == f"key {REDACTION_MARKER}"
    assert mask_sensitive("Bearer sk-proj_ABCdef123-456ghiJKL789") == f"Bearer {REDACTION_MARKER}"


def test_shorter_runs_are_left_alone() -> None:
    text = "attempt 1/3 for provider=openai id=" + "b" * 19
    assert mask_sensitive(text) == text


def test_masking_can_be_disabled() -> None:
    token = "x" * 40
    assert mask_sensitive(token, enabled=False) == token
    assert mask_sensitive("") == ""


def test_log_file_lines_are_timestamped_leveled_and_redacted(tmp_path) -> None:
    path = setup_logging(tmp_path / "logs", mask_keys=True)
    log = get_logger()

    log.warning("using key %s", "sk-" + "Z" * 30)
    log.debug("Attempt 1/3 for provider=openai")
    for handler in log.handlers:
        handler.flush()

    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("multi-ai-chat.") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert "[WARNING] using key <REDACTED>" in lines[0]
    assert "Z" * 30 not in lines[0]
    assert "[DEBUG] Attempt 1/3 for provider=openai" in lines[1]
    assert lines[0][:4].isdigit()
