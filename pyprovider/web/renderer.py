# pyprovider/web/renderer.py
from typing import Any, Dict
import html as _htmllib

from pyprovider.core.hook import HookContext
from pyprovider.input.dispatch import EVENT_PREFIX, event_handlers, node_id

_BLOCK_TAGS = {"div", "p"}


def _escape(s: Any) -> str:
    return _htmllib.escape("" if s is None else str(s), quote=True)


def _style_to_str(v: Any) -> str:
    """Convert a style dict to a CSS string.

    Example: ``{"font_size":"14px","background-color":"#fff"} -> "font-size:14px;background-color:#fff"``
    """
    if isinstance(v, dict):
        parts = []
        for k, val in v.items():
            k = k.replace("_", "-")
            parts.append(f"{k}:{val}")
        return ";".join(parts)
    return str(v)


def _attrs_to_str(props: Dict[str, Any]) -> str:
    """Convert props (excluding children/key/handlers) into HTML attributes.

    Rules:
      - ``class_`` -> ``class``
      - ``data_xxx`` -> ``data-xxx``
      - ``aria_xxx`` -> ``aria-xxx``
      - style dict -> ``style="k:v;..."``
      - ``True`` values -> boolean attributes (e.g., ``disabled``)
      - lists/tuples -> ``' '.join(...)``
      - ``on_xxx`` handlers are skipped
    """
    if not props:
        return ""

    out = []
    for k, v in props.items():
        if k in ("children", "key") or k.startswith(EVENT_PREFIX):
            continue
        if v is None:
            continue

        # normalizations
        if k == "class_":
            k = "class"
        elif k.startswith("data_"):
            k = "data-" + k[5:].replace("_", "-")
        elif k.startswith("aria_"):
            k = "aria-" + k[5:].replace("_", "-")

        # values
        if isinstance(v, (list, tuple)):
            v = " ".join(map(str, v))
        elif k == "style":
            v = _style_to_str(v)

        # booleans as valueless attributes
        if v is True:
            out.append(k)
            continue
        if v is False:
            continue

        out.append(f'{k}="{_escape(v)}"')

    return (" " + " ".join(out)) if out else ""


def _event_attrs(ctx: HookContext) -> str:
    events = sorted(event_handlers(ctx))
    if not events:
        return ""
    return f' data-pr-id="{_escape(node_id(ctx))}" data-pr-on="{_escape(" ".join(events))}"'


def _render_node(ctx: HookContext) -> str:
    fn = ctx.component_fn

    # Text node (created by ``web/html.t(...)`` or a bare string)
    if getattr(fn, "__is_text_node__", False):
        val = ctx.props.get("value", "")
        return _escape(val)

    # HTML tag
    if getattr(fn, "__is_html_tag__", False):
        tag = getattr(fn, "__html_tag_name__", "div")
        attrs = _attrs_to_str(ctx.props) + _event_attrs(ctx)
        inner = "".join(_render_node(ch) for ch in ctx.children)
        return f"<{tag}{attrs}>{inner}</{tag}>"

    # Logical components (Toggle, Provider, Consumer, ...) are transparent to HTML
    return "".join(_render_node(ch) for ch in ctx.children)


def render_to_html(root_ctx: HookContext) -> str:
    """Render the subtree of ``root_ctx`` (its children) into an HTML string."""
    return "".join(_render_node(ch) for ch in root_ctx.children)


def _text_node(ctx: HookContext) -> str:
    fn = ctx.component_fn
    if getattr(fn, "__is_text_node__", False):
        return str(ctx.props.get("value", ""))

    inner = "".join(_text_node(ch) for ch in ctx.children)
    tag = getattr(fn, "__html_tag_name__", None)
    if tag == "button":
        return f"[{inner}]"
    if tag in _BLOCK_TAGS:
        return f"{inner}\n"
    return inner


def render_to_text(root_ctx: HookContext) -> str:
    """Plain-text view of the tree: blocks on their own line, buttons as ``[label]``."""
    text = "".join(_text_node(ch) for ch in root_ctx.children)
    return "\n".join(line for line in text.splitlines() if line.strip())
