# The provider pattern
from pyprovider.core.children import as_children
from pyprovider.core.core import component, hooks
from pyprovider.core.errors import UsageError
from pyprovider.core.provider import UNSET, create_context
from .store import ToggleStateStore, log_on_toggle


ToggleContext = create_context(name="Toggle")


@component
def ToggleConsumer(children=None, **rest):
    """``ToggleContext.Consumer`` that refuses to render outside a ``Toggle``.

    Extra props are passed through to the underlying Consumer.
    """

    def _guarded(context):
        if context is UNSET:
            raise UsageError(
                "Toggle.Consumer cannot be rendered outside the Toggle component"
            )
        return children(context)

    return ToggleContext.Consumer(children=_guarded, **rest)


@component
def Toggle(on_toggle=log_on_toggle, children=None, **rest):
    """Own an ``on`` flag and broadcast ``{on, toggle}`` to the subtree.

    ``children`` is either a static tree or a function of the current
    ``ToggleValue``; any other prop is handed to the Provider as-is.
    """
    store = hooks.use_memo(lambda: ToggleStateStore(on_toggle), [])
    store.on_toggle = on_toggle
    _on, set_on = hooks.use_state(store.on)

    def _bind_store():
        unsubscribe = store.subscribe(set_on)

        def _release():
            unsubscribe()
            store.close()

        return _release

    hooks.use_effect(_bind_store, [store])

    value = store.value
    ui = as_children(children).resolve(value)
    return ToggleContext.Provider(value=value, children=ui, **rest)


Toggle.Consumer = ToggleConsumer
Toggle.Context = ToggleContext
