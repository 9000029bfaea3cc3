"""Demo tree: a Toggle whose state is read four components down.

None of the layers receive ``on``/``toggle`` as props; ``Layer2`` and
``Layer4`` read them from ``Toggle.Consumer``.
"""
from pyprovider.components.switch import Switch
from pyprovider.core.core import component
from pyprovider.web import html
from .store import log_on_toggle
from .toggle import Toggle


@component
def Layer1():
    return Layer2()


@component
def Layer2():
    return Toggle.Consumer(
        children=lambda ctx: html.div(
            class_="layer2",
            children=[
                html.p(children="The button is on" if ctx.on else "The button is off"),
                Layer3(),
            ],
        )
    )


@component
def Layer3():
    return Layer4()


@component
def Layer4():
    return Toggle.Consumer(
        children=lambda ctx: Switch(on=ctx.on, on_click=ctx.toggle)
    )


@component
def Usage(on_toggle=log_on_toggle):
    return Toggle(on_toggle=on_toggle, children=[Layer1()])


Usage.title = "The Provider Pattern"
