"""
Caller-owned search state: the route catalog, the routing parameters and an
optional presenter that draws results.
"""
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from src.routing.models import Route, Selection
from src.routing.params import RoutingParams
from src.routing.selector import select_best_route


class RoutePresenter(Protocol):
    """One-way sink for search results. clear() must release any overlay or timer from the previous result."""

    def clear(self) -> None: ...

    def render(self, selection: Selection) -> None: ...

    def render_no_route(self, rider: Sequence[float], destination: Sequence[float]) -> None: ...


class SearchContext:
    def __init__(
        self,
        routes: Sequence[Route],
        params: RoutingParams | None = None,
        tz: str | None = None,
        presenter: RoutePresenter | None = None,
    ):
        self.routes = list(routes)
        self.params = params or RoutingParams()
        self.tz = tz
        self.presenter = presenter

    def route(self, route_id: str) -> Route | None:
        return next((r for r in self.routes if r.id == route_id), None)

    def search(
        self,
        rider: Sequence[float],
        destination: Sequence[float],
        now: datetime | None = None,
    ) -> Selection | None:
        """Select the best route; a presenter, if any, is cleared before it sees the new result."""
        if self.presenter is not None:
            self.presenter.clear()
        selection = select_best_route(self.routes, rider, destination, now=now, tz=self.tz, params=self.params)
        if self.presenter is not None:
            if selection is None:
                self.presenter.render_no_route(rider, destination)
            else:
                self.presenter.render(selection)
        return selection
