from functools import partial

import httpx

from multiai import cli
from multiai.presenter import render
from multiai.providers.executor import execute
from multiai.providers.router import run
from tests.helpers import make_settings, make_spec


def test_no_question_prints_usage_and_exits_1(capsys) -> None:
    assert cli.main([]) == 1
    assert "Usage: multi-ai-chat" in capsys.readouterr().out


def test_invalid_configuration_exits_2(clean_env, monkeypatch, capsys) -> None:
    monkeypatch.setenv("MULTIAI_RETRY_MAX", "many")
    assert cli.main(["hello"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_ping_scenario_end_to_end() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"text": "pong"})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    specs = {"A": make_spec(name="A"), "B": make_spec(name="B", token=None)}
    settings = make_settings(providers=["A", "B"])
    executor = partial(execute, client=client, sleep=lambda _: None)

    results = run("ping", settings.providers, specs, settings, executor)
    report = render(results, "ping", providers=settings.providers)

    assert len(calls) == 1
    lines = report.splitlines()
    a = lines.index(">>> Provider: A")
    b = lines.index(">>> Provider: B")
    assert lines[a + 2] == "pong"
    assert lines[b + 2] == '{"error":"missing_api_key","provider":"B"}'


def test_main_reports_every_configured_provider(clean_env, monkeypatch, capsys) -> None:
    monkeypatch.setenv("MULTIAI_PROVIDERS", "openai,bard")
    monkeypatch.setenv("MULTIAI_LOG_DIR", str(clean_env / "logs"))
    monkeypatch.setenv("MULTIAI_CONCURRENT_WAIT", "0")

    assert cli.main(["what", "is", "up?"]) == 0

    out = capsys.readouterr().out
    assert "Question: what is up?" in out
    assert '{"error":"missing_api_key","provider":"openai"}' in out
    assert '{"error":"unknown_provider","provider":"bard"}' in out
    assert out.index(">>> Provider: OPENAI") < out.index(">>> Provider: BARD")

    log_files = list((clean_env / "logs").glob("multi-ai-chat.*.log"))
    assert len(log_files) == 1
    assert "Starting multi-ai-chat for question: what is up?" in log_files[0].read_text(encoding="utf-8")


def test_words_that_look_like_options_stay_in_the_question(clean_env, monkeypatch, capsys) -> None:
    monkeypatch.setenv("MULTIAI_LOG_DIR", str(clean_env / "logs"))
    asked = []

    def fake_ask(question, settings):
        asked.append(question)
        return "report"

    monkeypatch.setattr(cli, "ask", fake_ask)

    assert cli.main(["--verbose", "mode?", "-x", "--"]) == 0
    assert asked[0].startswith("--verbose mode? -x")
    assert "report" in capsys.readouterr().out
