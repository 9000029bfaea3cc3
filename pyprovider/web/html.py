from pyprovider.core.core import Text, component

# text node: html.t("hello")
t = Text


def tag(name: str):
    """Build a host component rendering the HTML element ``name``.

    Props become attributes (see ``renderer``); callables such as
    ``on_click`` are event handlers and are never rendered.
    """

    @component
    def _host(children=None, **attrs):
        return children

    _host.__name__ = name
    _host.__is_html_tag__ = True
    _host.__html_tag_name__ = name
    return _host


div = tag("div")
span = tag("span")
p = tag("p")
button = tag("button")
label = tag("label")
