from collections.abc import Callable, Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.dates import DateFactory, get_date_factory
from ..core.routing import make_url_builder
from ..core.translation import get_translator, negotiate_request_locale
from ..db import get_sessionmaker
from ..presenters.incident_update import IncidentUpdatePresenter

PresenterFactory = Callable[..., IncidentUpdatePresenter]


def get_db_session() -> Generator[Session, None, None]:
    SessionLocal = get_sessionmaker()
    with SessionLocal() as session:
        yield session


def get_date_factory_dep() -> DateFactory:
    return get_date_factory()


def get_request_locale(request: Request) -> str:
    """Locale for the response: Accept-Language if supported, else the configured one."""
    return negotiate_request_locale(
        request.headers.get("accept-language"), default=get_settings().locale
    )


def get_update_presenter(
    request: Request,
    locale: str = Depends(get_request_locale),
    dates: DateFactory = Depends(get_date_factory_dep),
) -> PresenterFactory:
    """Presenter factory bound to the current request's locale and URLs."""
    localized_dates = dates.for_locale(locale)
    translator = get_translator(locale)
    url_for = make_url_builder(request)

    def present(update) -> IncidentUpdatePresenter:
        return IncidentUpdatePresenter(
            update, dates=localized_dates, translator=translator, url_for=url_for
        )

    return present
