from pyprovider.core.core import component
from pyprovider.web import html


@component
def Switch(on=False, on_click=None, class_=None, **rest):
    classes = ["toggle-btn", "toggle-btn-on" if on else "toggle-btn-off"]
    if class_:
        classes.append(class_)
    return html.button(
        class_=classes,
        aria_pressed="true" if on else "false",
        on_click=on_click,
        children="on" if on else "off",
        **rest,
    )
