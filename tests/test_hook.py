import pytest

from pyprovider.core import VNode, component, hooks, mount, run_renders
from pyprovider.core.core import normalize_output


class _Controls:
    pass


def test_component_call_builds_a_vnode():
    @component
    def Leaf(label):
        return label

    node = Leaf(label="x", key="k")
    assert isinstance(node, VNode)
    assert node.props == {"label": "x"}
    assert node.key == "k"
    assert node.component_fn is Leaf


def test_normalize_output_flattens_and_wraps_strings():
    @component
    def Leaf():
        return []

    leaf = Leaf()
    out = normalize_output(["a", None, [leaf, ("b", False)], 3])
    assert [n.component_fn.__name__ for n in out] == ["Text", "Leaf", "Text", "Text"]
    assert [n.props.get("value") for n in out] == ["a", None, "b", "3"]


def test_hooks_outside_render_fail():
    with pytest.raises(RuntimeError, match="use_state"):
        hooks.use_state(0)


@pytest.mark.asyncio
async def test_functional_state_updates_use_latest_value():
    controls = _Controls()

    @component
    def Counter():
        count, controls.set_count = hooks.use_state(0)
        controls.count = count
        return str(count)

    await mount(Counter)
    controls.set_count(lambda c: c + 1)
    controls.set_count(lambda c: c + 1)
    await run_renders()
    assert controls.count == 2


@pytest.mark.asyncio
async def test_memo_and_callback_follow_deps():
    controls = _Controls()
    seen = []

    @component
    def App():
        dep, controls.set_dep = hooks.use_state(0)
        _other, controls.set_other = hooks.use_state(0)
        memo = hooks.use_memo(lambda: object(), [dep])
        cb = hooks.use_callback(lambda: dep, [dep])
        seen.append((memo, cb))
        return []

    await mount(App)
    controls.set_other(1)
    await run_renders()
    controls.set_dep(1)
    await run_renders()

    (m0, c0), (m1, c1), (m2, c2) = seen
    assert m0 is m1 and c0 is c1
    assert m2 is not m1 and c2 is not c1
    assert c2() == 1


@pytest.mark.asyncio
async def test_effects_run_after_render_and_clean_up():
    controls = _Controls()
    log = []

    @component
    def App():
        dep, controls.set_dep = hooks.use_state("a")

        def _effect():
            log.append(("run", dep))
            return lambda: log.append(("cleanup", dep))

        hooks.use_effect(_effect, [dep])
        return []

    root = await mount(App)
    assert log == [("run", "a")]

    controls.set_dep("b")
    await run_renders()
    assert log == [("run", "a"), ("cleanup", "a"), ("run", "b")]

    root.unmount()
    assert log[-1] == ("cleanup", "b")

    # updates after unmount are ignored
    controls.set_dep("c")
    await run_renders()
    assert log[-1] == ("cleanup", "b")


@pytest.mark.asyncio
async def test_async_effects_are_awaited():
    log = []

    @component
    def App():
        async def _effect():
            log.append("async")

        hooks.use_effect(_effect, [])
        return []

    await mount(App)
    assert log == ["async"]


@pytest.mark.asyncio
async def test_keyed_children_keep_their_state_when_reordered():
    controls = _Controls()
    states = {}

    @component
    def Item(name):
        value, set_value = hooks.use_state(name.upper())
        states[name] = value
        return value

    @component
    def List():
        order, controls.set_order = hooks.use_state(("a", "b"))
        return [Item(name=n, key=n) for n in order]

    root = await mount(List)
    first = {c.key: c for c in root.children}
    controls.set_order(("b", "a"))
    await run_renders()
    assert [c.key for c in root.children] == ["b", "a"]
    assert {c.key: c for c in root.children} == first


@pytest.mark.asyncio
async def test_removed_children_are_unmounted():
    controls = _Controls()

    @component
    def Leaf():
        return "leaf"

    @component
    def App():
        show, controls.set_show = hooks.use_state(True)
        return Leaf() if show else None

    root = await mount(App)
    (leaf,) = root.children
    controls.set_show(False)
    await run_renders()
    assert root.children == []
    assert leaf._mounted is False
