from deskkit.status import MAXLEN, Component, main, render_status


def test_render_joins_formatted_values():
    parts = [Component(lambda arg: arg, "%s-", "a"), Component(lambda arg: arg, "%s", "b")]
    assert render_status(parts) == "a-b"


def test_render_passes_argument():
    seen = []

    def func(arg):
        seen.append(arg)
        return "ok"

    assert render_status([Component(func, "%s", "eth0")]) == "ok"
    assert seen == ["eth0"]


def test_render_unknown_for_missing_value():
    assert render_status([Component(lambda arg: None, "%s")]) == "n/a"


def test_render_custom_unknown():
    assert render_status([Component(lambda arg: None, "%s")], unknown="?") == "?"


def test_render_keeps_empty_value():
    assert render_status([Component(lambda arg: "", "[%s]")]) == "[]"


def test_render_percent_escape():
    assert render_status([Component(lambda arg: "5", "%s%%")]) == "5%"


def test_render_stops_before_overflow(capsys):
    parts = [
        Component(lambda arg: "ok", "%s"),
        Component(lambda arg: "x" * MAXLEN, "%s"),
        Component(lambda arg: "tail", "%s"),
    ]
    assert render_status(parts) == "ok"
    assert "truncated" in capsys.readouterr().err


def test_render_stays_below_limit():
    parts = [Component(lambda arg: "y" * 500, "%s") for _ in range(10)]
    assert len(render_status(parts)) < MAXLEN


def test_main_version(capsys):
    assert main(["-v"]) == 1
    assert capsys.readouterr().err.strip() == "slstatus-1.0"


def test_main_unknown_flag(capsys):
    assert main(["-x"]) == 1
    assert capsys.readouterr().err.startswith("usage: slstatus")


def test_main_rejects_operands(capsys):
    assert main(["-s", "extra"]) == 1
    assert capsys.readouterr().err.startswith("usage: slstatus")


def test_main_needs_display(monkeypatch, capsys):
    monkeypatch.delenv("DISPLAY", raising=False)
    assert main([]) == 1
    assert "XOpenDisplay" in capsys.readouterr().err


def test_main_once_prints_one_line(capsys):
    assert main(["-1"]) == 0
    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert out.startswith(" CPU n/a%  RAM ")