# hook.py ----------------------------------------------------
from weakref import WeakSet
from . import core
from .runtime import schedule_rerender
import asyncio
import inspect

_MISSING = object()


def _same_props(old: dict, new: dict) -> bool:
    if old is new:
        return True
    if old.keys() != new.keys():
        return False
    return all(old[k] is new[k] for k in old)


class HookContext:
    def __init__(self, name, component_fn, *, props=None, key=None, parent=None) -> None:
        self.name = name
        self.component_fn = component_fn
        self.props = props or {}
        self.key = key
        self.parent = parent

        self.hooks: list = []
        self.effects: list = []
        self.children: list["HookContext"] = []
        self.hook_idx: int = 0
        self.render_count: int = 0
        self._slot = key
        self._effect_slots: set[int] = set()

        # context plumbing: what this node provides, who reads it, what it reads
        self._provides: dict = {}
        self._subscribers: dict = {}
        self._ctx_subs: list = []

        self._dirty: bool = True
        self._mounted: bool = (
            True  # Track mount lifecycle to avoid rerenders after unmount
        )

    def __repr__(self):
        return f"<HookContext {self.name} key={self.key!r}>"

    def use_state(self, initial):
        idx = self.hook_idx
        if idx >= len(self.hooks):
            self.hooks.append(initial)

        def set_state(val):
            if not self._mounted:  # Ignore state updates after unmount
                return
            if callable(val):
                val = val(self.hooks[idx])

            if val != self.hooks[idx]:
                self.hooks[idx] = val
                schedule_rerender(self, reason=f"use_state[{idx}] set -> {val}")

        self.hook_idx += 1
        return self.hooks[idx], set_state

    def use_effect(self, effect_fn, deps):
        deps_key = None if deps is None else tuple(deps)  # [] → () (immutable object)
        idx = self.hook_idx

        if idx >= len(self.hooks):  # first mount
            self.hooks.append((None, deps_key))
            self.effects.append((effect_fn, deps_key, idx))
            self._effect_slots.add(idx)
        else:  # updates
            old_cleanup, old_deps = self.hooks[idx]
            if deps_key is not None and old_deps != deps_key:  # deps changed
                self.effects.append((effect_fn, deps_key, idx))
                self.hooks[idx] = (old_cleanup, deps_key)

        self.hook_idx += 1

    def use_callback(self, fn, deps=None):
        deps_key = None if deps is None else tuple(deps)  # [] -> () (immutable object)
        idx = self.hook_idx

        if idx >= len(self.hooks):  # first time
            self.hooks.append((fn, deps_key))
        else:
            cached_fn, old_deps = self.hooks[idx]
            if deps_key is not None and old_deps != deps_key:
                self.hooks[idx] = (fn, deps_key)  # deps changed -> new fn
            else:
                fn = cached_fn  # use memo

        self.hook_idx += 1
        return fn

    def use_memo(self, factory, deps=None):
        """Return the cached ``factory()`` result until ``deps`` change.

        Deps are compared with ``!=`` on a tuple, so objects without ``__eq__``
        are compared by identity.
        """
        deps_key = None if deps is None else tuple(deps)  # [] → () (immutable object)
        idx = self.hook_idx

        if idx >= len(self.hooks):  # first time
            self.hooks.append((factory(), deps_key))
        else:
            value, old_key = self.hooks[idx]
            if deps_key is not None and old_key != deps_key:
                value = factory()  # deps changed -> new value
                self.hooks[idx] = (value, deps_key)

        self.hook_idx += 1
        return self.hooks[idx][0]

    def use_context(self, channel):
        """Read the nearest provided value for ``channel`` and subscribe to it.

        Falls back to the channel default when no provider is in scope.
        """
        channel_key = channel
        found = core.lookup_scope(channel_key)

        if found is None:
            value = getattr(channel, "default", None)
        else:
            value, provider = found
            provider._subscribers.setdefault(channel_key, WeakSet()).add(self)
            if (provider, channel_key) not in self._ctx_subs:  # keep reference to run on unmount
                self._ctx_subs.append((provider, channel_key))

        idx = self.hook_idx
        if idx >= len(self.hooks):
            self.hooks.append(value)
        else:
            self.hooks[idx] = value

        self.hook_idx += 1
        return value

    def provide(self, channel_key, value):
        """Expose ``value`` to the descendants rendered under this node.

        When the value reference changes, subscribed descendants are marked
        dirty so they re-render even if every node in between is skipped.
        """
        from .debug import record_schedule

        previous = self._provides.get(channel_key, _MISSING)
        self._provides[channel_key] = value
        if previous is _MISSING or previous is value:
            return
        for sub in list(self._subscribers.get(channel_key, ())):
            record_schedule(sub, f"context value provided by {self.name} changed")
            sub._dirty = True

    def _run_cleanup_slot(self, slot):
        cleanup = slot[0] if isinstance(slot, tuple) else None
        if cleanup:
            try:
                if inspect.iscoroutinefunction(cleanup):
                    asyncio.create_task(cleanup())
                else:
                    cleanup()
            except Exception:
                pass

    def unmount(self):
        # 1. Run effect cleanups
        for idx in list(self._effect_slots):
            if idx < len(self.hooks):
                self._run_cleanup_slot(self.hooks[idx])

        # 2. Remove Context subscriptions
        for provider, channel_key in self._ctx_subs:
            subs = provider._subscribers.get(channel_key)
            if subs is not None:
                subs.discard(self)
        self._ctx_subs.clear()

        # 3. Unmount children recursively
        for child in self.children:
            child.unmount()

        # 4. GC
        self.children.clear()
        self.hooks.clear()
        self.effects.clear()
        self._effect_slots.clear()
        self._provides.clear()
        self._subscribers.clear()
        # mark as unmounted to skip future rerenders
        self._mounted = False

    def render(self):
        from .debug import enter_render, exit_render

        token = core._context_stack.set(self)
        scope_token = None
        _depth_token = enter_render(self)
        self._debug_reasons = []

        try:
            self._dirty = False
            self.hook_idx = 0
            self.effects = []
            self.render_count += 1

            # 1. execute component function
            output = self.component_fn.render_fn(**self.props)
            vnodes = core.normalize_output(output)

            # 2. values provided during this render are visible to the children only
            if self._provides:
                scope_token = core.push_scope(self, self._provides)

            # 3. reconciliation – reuse or create child contexts
            old_children = {(c._slot, c.component_fn): c for c in self.children}
            self.children = []
            pending = []
            for idx, vnode in enumerate(vnodes):
                slot = vnode.key if vnode.key is not None else f"__idx_{idx}"
                matched = old_children.pop((slot, vnode.component_fn), None)

                if matched is None:
                    matched = HookContext(
                        vnode.component_fn.__name__,
                        vnode.component_fn,
                        props=vnode.props,
                        key=vnode.key,
                        parent=self,
                    )
                    needs_render = True
                else:
                    # same props and nothing scheduled -> skip, but still visit dirty descendants
                    needs_render = matched._dirty or not _same_props(
                        matched.props, vnode.props
                    )
                    matched.props = vnode.props

                matched._slot = slot
                self.children.append(matched)
                pending.append(needs_render)

            # 4. recursively unmount orphans
            for orphan in old_children.values():
                orphan.unmount()

            # 5. recursively render current children
            for child, needs_render in zip(self.children, pending):
                if needs_render:
                    child.render()
                else:
                    child.render_dirty_descendants()
        finally:
            if scope_token is not None:
                core.pop_scope(scope_token)
            exit_render(_depth_token)
            # restore previous component
            core._context_stack.reset(token)

    def render_dirty_descendants(self):
        scope_token = (
            core.push_scope(self, self._provides) if self._provides else None
        )
        try:
            for child in self.children:
                if child._dirty:
                    child.render()
                else:
                    child.render_dirty_descendants()
        finally:
            if scope_token is not None:
                core.pop_scope(scope_token)

    def rerender(self):
        """Render this node on its own, inside the scopes its ancestors provide."""
        chain = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent

        scopes = {}
        for node in reversed(chain):
            for channel_key, value in node._provides.items():
                scopes[channel_key] = (value, node)

        token = core.replace_scope(scopes)
        try:
            self.render()
        finally:
            core.pop_scope(token)

    async def run_effects(self):
        effects, self.effects = self.effects, []
        for fx, deps, idx in effects:
            cln, _ = self.hooks[idx]
            if cln:
                if inspect.iscoroutinefunction(cln):
                    await cln()
                else:
                    cln()
            res = fx()
            if asyncio.iscoroutine(res):
                res = await res
            self.hooks[idx] = ((res if callable(res) else None), deps)

        for ch in list(self.children):
            await ch.run_effects()

    # FOR DEBUGGING
    def render_tree(self, indent=0):
        from .debug import render_tree as _render_tree

        _render_tree(self, indent)
