import pytest

from pyprovider.core import mount, run_renders
from pyprovider.core.debug import enable_tracing, print_last_trace, render_tree
from pyprovider.input.dispatch import dispatch, iter_targets
from pyprovider.toggle import Usage


def test_no_trace_yet(capsys):
    print_last_trace()
    assert "no render trace yet" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_trace_lists_only_the_nodes_a_toggle_renders(calls, capsys):
    enable_tracing()
    root = await mount(Usage, on_toggle=calls.append)
    (target, _button), = list(iter_targets(root))
    dispatch(root, target)
    await run_renders()
    capsys.readouterr()

    print_last_trace()
    out = capsys.readouterr().out
    assert "Render Trace" in out
    assert "origin: Toggle" in out
    assert "use_state" in out
    assert "Toggle.Consumer" in out
    assert "Layer1" not in out
    assert "Layer3" not in out


@pytest.mark.asyncio
async def test_render_tree_prints_every_node_with_counts(calls, capsys):
    root = await mount(Usage, on_toggle=calls.append)
    render_tree(root)
    out = capsys.readouterr().out
    for name in ("Usage", "Toggle", "Layer1", "Layer4", "Switch", "button"):
        assert name in out
    assert "renders=1" in out
