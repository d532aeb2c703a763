"""
Presenter base class.

A presenter wraps a model instance and adds display-only attributes. Any
attribute the presenter does not define is read from the wrapped object, so
templates can use a presenter wherever they would use the model.
"""

from typing import Any, Optional

from ..core.dates import DateFactory, get_date_factory
from ..core.routing import UrlBuilder, make_url_builder
from ..core.translation import Translator, get_translator
from ..services.markdown import MarkdownRenderer, get_markdown_renderer


class BasePresenter:
    def __init__(
        self,
        wrapped_object: Any,
        *,
        dates: Optional[DateFactory] = None,
        translator: Optional[Translator] = None,
        url_for: Optional[UrlBuilder] = None,
        markdown: Optional[MarkdownRenderer] = None,
    ) -> None:
        self.wrapped_object = wrapped_object
        self.dates = dates or get_date_factory()
        self.translator = translator or get_translator()
        self.url_for = url_for or make_url_builder()
        self.markdown = markdown or get_markdown_renderer()

    def __getattr__(self, name: str) -> Any:
        # Only called for names not found on the presenter itself
        if name == "wrapped_object":
            raise AttributeError(name)
        if isinstance(getattr(type(self), name, None), property):
            # The property raised AttributeError itself; run it again so the
            # real error surfaces instead of the record's attribute
            return getattr(type(self), name).fget(self)
        return getattr(self.wrapped_object, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.wrapped_object!r})"

    def to_dict(self) -> dict[str, Any]:
        return self.wrapped_object.to_dict()
