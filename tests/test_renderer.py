import pytest

from pyprovider.components.switch import Switch
from pyprovider.core import component, mount
from pyprovider.web import html
from pyprovider.web.renderer import render_to_html, render_to_text


@pytest.mark.asyncio
async def test_attributes_are_normalized():
    @component
    def App():
        return html.div(
            class_=["a", "b"],
            data_test_id="x",
            aria_label="lbl",
            style={"font_size": "14px"},
            hidden=True,
            disabled=False,
            title=None,
            children="hi",
        )

    root = await mount(App)
    assert render_to_html(root) == (
        '<div class="a b" data-test-id="x" aria-label="lbl" '
        'style="font-size:14px" hidden>hi</div>'
    )


@pytest.mark.asyncio
async def test_text_is_escaped():
    @component
    def App():
        return html.p(title='"q"', children="<b>&</b>")

    root = await mount(App)
    assert render_to_html(root) == '<p title="&quot;q&quot;">&lt;b&gt;&amp;&lt;/b&gt;</p>'


@pytest.mark.asyncio
async def test_switch_markup_and_text():
    clicks = []

    @component
    def App():
        return Switch(on=True, on_click=lambda: clicks.append(1))

    root = await mount(App)
    assert render_to_html(root) == (
        '<button class="toggle-btn toggle-btn-on" aria-pressed="true" '
        'data-pr-id="0.0" data-pr-on="click">on</button>'
    )
    assert render_to_text(root) == "[on]"


@pytest.mark.asyncio
async def test_logical_components_are_transparent():
    @component
    def Inner():
        return ["a", html.span(children="b")]

    @component
    def App():
        return html.div(children=[Inner(), "c"])

    root = await mount(App)
    assert render_to_html(root) == "<div>a<span>b</span>c</div>"
    assert render_to_text(root) == "abc"
