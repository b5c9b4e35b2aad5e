# tests/test_console.py

from __future__ import annotations

from odoo_timer.cli.console import run_console_loop
from odoo_timer.cli.menu import QUIT_LINE, SEPARATOR, render_menu
from odoo_timer.cli.session_flow import prompt_connection_config
from odoo_timer.odoo.errors import LoginFailed, NotAuthenticated
from odoo_timer.odoo.models import Outcome, SessionIdentity, WorkItem


class ScriptedInput:
    """Feeds prepared lines to input(); raises EOFError when exhausted."""

    def __init__(self, lines: list[str]) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def test_render_menu_success() -> None:
    items = [
        WorkItem(id=5, name="Fix bug", project_name="Website"),
        WorkItem(id=6, name="Write docs", project_name="Internal"),
    ]
    assert render_menu(Outcome(value=items)) == [
        "Website: Fix bug",
        "Internal: Write docs",
        SEPARATOR,
        QUIT_LINE,
    ]


def test_render_menu_empty_and_error() -> None:
    assert render_menu(Outcome(value=[])) == ["(no tasks)", SEPARATOR, QUIT_LINE]
    assert render_menu(Outcome(error=NotAuthenticated("Not logged in"))) == [
        "Error: Not logged in",
        QUIT_LINE,
    ]


def test_prompt_uses_settings_defaults(settings) -> None:
    settings.default_url = "https://odoo.example.com"
    settings.default_db = "prod"
    inputs = ScriptedInput(["", "", "bob"])

    config = prompt_connection_config(settings, input_fn=inputs, secret_fn=lambda _: " tok ")

    assert config.base_url == "https://odoo.example.com"
    assert config.database == "prod"
    assert config.username == "bob"
    assert config.api_token == "tok"
    assert "[https://odoo.example.com]" in inputs.prompts[0]
    assert "tok" not in repr(config)


def test_console_retries_login_then_lists_tasks(state, fake_session) -> None:
    fake_session.login_outcomes = [
        Outcome(error=LoginFailed("Login failed")),
        Outcome(value=SessionIdentity(user_id=7)),
    ]
    fake_session.fetch_outcomes = [Outcome(value=[WorkItem(id=5, name="Fix bug", project_name="Website")])]
    inputs = ScriptedInput(
        [
            "https://odoo.example.com", "prod", "alice",
            "https://odoo.example.com", "prod", "alice",
            "/whoami",
            "/quit",
        ]
    )
    out: list[str] = []

    run_console_loop(state, input_fn=inputs, secret_fn=lambda _: "token", out=out.append)

    assert "Error: Login failed" in out
    assert "Logged in (uid=7)." in out
    assert "Website: Fix bug" in out
    assert "Logged in as uid=7" in out
    assert len(fake_session.logins) == 2
    assert state.identity == SessionIdentity(user_id=7)


def test_console_exits_when_login_prompt_is_closed(state, fake_session) -> None:
    out: list[str] = []

    run_console_loop(state, input_fn=ScriptedInput([]), secret_fn=lambda _: "", out=out.append)

    assert fake_session.logins == []
    assert fake_session.fetch_calls == 0


def test_console_unknown_input_hint(state, fake_session) -> None:
    fake_session.login_outcomes = [Outcome(value=SessionIdentity(user_id=3))]
    inputs = ScriptedInput(["https://odoo.example.com", "prod", "alice", "start timer"])
    out: list[str] = []

    run_console_loop(state, input_fn=inputs, secret_fn=lambda _: "t", out=out.append)

    assert any("Unknown input" in line for line in out)
