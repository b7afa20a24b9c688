"""
MkDocs hook: publish the FastMCP Runner JSON-LD descriptor on every page.

MkDocs loads hooks from files, so re-export it from one in the docs project:

    # docs/hooks/structured_data.py
    from schemadoc.hooks import on_post_page

    # mkdocs.yml
    hooks:
      - docs/hooks/structured_data.py

Optional settings live under ``extra.schemadoc``:

    extra:
      schemadoc:
        enabled: true
        indent: null
        escape_html: true

``schemadoc: false`` on its own turns the hook off. Values that are not a
mapping, and an indent that is not an integer, fall back to the defaults.
A page without a <head> is returned unchanged; the build carries on.
"""

from typing import Any, Mapping, Optional

from schemadoc.cli import log
from schemadoc.publisher import HtmlDocumentSink, MetadataPublisher
from schemadoc.renderer import PublishOptions

CONFIG_KEY = "schemadoc"


def _settings(config: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    if not config:
        return {}
    extra = config.get("extra")
    if not isinstance(extra, Mapping):
        return {}

    value = extra.get(CONFIG_KEY)
    # `schemadoc: true` / `schemadoc: false` toggle the hook
    if isinstance(value, bool):
        return {"enabled": value}
    if not isinstance(value, Mapping):
        return {}
    return dict(value)


def options_from_config(config: Optional[Mapping[str, Any]]) -> PublishOptions:
    """Build PublishOptions from the ``extra.schemadoc`` section of mkdocs.yml."""
    settings = _settings(config)

    indent = settings.get("indent")
    if isinstance(indent, bool) or not isinstance(indent, int):
        indent = None

    return PublishOptions(
        indent=indent,
        escape_html=bool(settings.get("escape_html", True)),
    )


def on_post_page(output: str, page: Any = None, config: Optional[Mapping[str, Any]] = None, **_: Any) -> str:
    """Append the descriptor to the rendered page's <head>."""
    if not _settings(config).get("enabled", True):
        return output

    sink = HtmlDocumentSink(output)
    publisher = MetadataPublisher(options=options_from_config(config))
    if not publisher.publish_safely(sink):
        where = getattr(getattr(page, "file", None), "src_uri", None) or "page"
        for warning in publisher.get_warnings():
            log(f"Warning: {where}: {warning}")
        return output

    return sink.render()
