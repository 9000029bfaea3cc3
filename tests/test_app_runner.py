import pytest

from pyprovider.boot import AppRunner, bootstrap, Settings
from pyprovider.boot.terminal import handle_command
from pyprovider.core import UsageError, component
from pyprovider.toggle import Toggle, Usage


@pytest.fixture
def runner(calls):
    app = AppRunner(Usage, props={"on_toggle": calls.append}, fps=50)
    yield app
    app.shutdown()


def test_click_toggles_and_returns_new_text(runner, calls):
    assert runner.text() == "The button is off\n[off]"
    assert runner.click() == "The button is on\n[on]"
    assert calls == [True]
    assert runner.click() == "The button is off\n[off]"
    assert calls == [True, False]


def test_targets_and_dispatch(runner, calls):
    (target,) = runner.targets()
    html = runner.dispatch(target)
    assert "The button is on" in html
    assert calls == [True]


def test_unknown_target_raises_key_error(runner):
    with pytest.raises(KeyError):
        runner.click("7.7")


def test_html_bridge_receives_updates(runner):
    pushed = []
    runner.attach_web_bridge(on_html=pushed.append)
    runner.click()
    assert len(pushed) == 1
    assert "The button is on" in pushed[0]


def test_usage_error_propagates_from_startup():
    @component
    def Broken():
        return Toggle.Consumer(children=lambda ctx: "never")

    with pytest.raises(UsageError):
        AppRunner(Broken)


def test_calls_after_shutdown_fail(calls):
    app = AppRunner(Usage, props={"on_toggle": calls.append})
    app.shutdown()
    with pytest.raises(RuntimeError):
        app.text()


def test_bootstrap_uses_settings(calls):
    with bootstrap(Usage, settings=Settings(fps=10, trace=False), on_toggle=calls.append) as app:
        assert app.click() == "The button is on\n[on]"
    assert calls == [True]


def test_terminal_commands(runner, calls, capsys):
    assert handle_command(runner, "click") is True
    assert "The button is on" in capsys.readouterr().out

    assert handle_command(runner, ":targets") is True
    assert runner.targets()[0] in capsys.readouterr().out

    assert handle_command(runner, "click 1.2.3") is True
    assert "[error]" in capsys.readouterr().out

    assert handle_command(runner, ":tree") is True
    assert "Layer1" in capsys.readouterr().out

    assert handle_command(runner, ":trace") is True
    assert "Render Trace" in capsys.readouterr().out

    assert handle_command(runner, "") is True
    assert handle_command(runner, "bogus") is True
    assert "Commands" in capsys.readouterr().out

    assert handle_command(runner, ":q") is False
    assert calls == [True]
