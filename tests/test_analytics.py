"""
Tests for analytics calls, the dashboard summary and the visitor explorer.

The explorer drives two pagination stores: the outer visitor list and the
expanded visitor's visit history.
"""

import httpx
import pytest

from getgrip.shared.core.exceptions import ApiFailure
from getgrip.shared.domain.analytics.explorer import VisitorExplorer, format_timestamp, truncate_user_agent
from getgrip.shared.domain.analytics.service import AnalyticsService, DashboardSummary
from getgrip.shared.domain.catalog.service import CatalogService
from getgrip.shared.domain.models import Product
from tests.helpers import api_path, envelope

VISITORS_PER_PAGE = 2
TOTAL_VISITORS = 5


def visitors_page(page: int):
    start = (page - 1) * VISITORS_PER_PAGE
    ips = [f"10.0.0.{n}" for n in range(start + 1, min(start + VISITORS_PER_PAGE, TOTAL_VISITORS) + 1)]
    return {
        "totalVisits": 50,
        "uniqueVisitors": TOTAL_VISITORS,
        "todayVisits": 4,
        "visitsPerDay": [{"_id": "2026-10-16", "count": 7}],
        "recentVisitors": [{"ip": ip, "totalVisits": 10} for ip in ips],
        "pagination": {"page": page, "limit": VISITORS_PER_PAGE, "total": TOTAL_VISITORS, "pages": 3},
    }


def visitor_detail(ip: str, page: int):
    return {
        "ip": ip,
        "totalVisits": 25,
        "visits": [{"_id": f"{ip}-{page}-{n}", "page": "/", "userAgent": "Mozilla"} for n in range(10)],
        "pagination": {"page": page, "limit": 10, "total": 25, "pages": 3},
    }


class AnalyticsApi:
    """Fake visitor endpoints that remember what was asked."""

    def __init__(self):
        self.requests = []
        self.fail_detail = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = api_path(request)
        page = int(request.url.params.get("page", 1))
        if path == "/visitors/stats":
            return envelope(visitors_page(page))
        if path.startswith("/visitors/stats/ip/"):
            if self.fail_detail:
                return httpx.Response(500)
            ip = request.url.path.rsplit("/", 1)[-1]
            return envelope(visitor_detail(ip, page))
        return httpx.Response(404)

    def paths(self):
        return [(api_path(r), r.url.params.get("page")) for r in self.requests]


@pytest.fixture
def fake_api():
    return AnalyticsApi()


@pytest.fixture
def explorer(make_api, fake_api) -> VisitorExplorer:
    api = make_api(fake_api)
    analytics = AnalyticsService(api, CatalogService(api))
    return VisitorExplorer(analytics, visitor_page_size=VISITORS_PER_PAGE, detail_page_size=10)


class TestVisitorExplorer:
    @pytest.mark.asyncio
    async def test_load_sets_outer_totals(self, explorer):
        stats = await explorer.load_visitors()

        assert [v.ip for v in stats.recent_visitors] == ["10.0.0.1", "10.0.0.2"]
        assert explorer.visitors.total_items == TOTAL_VISITORS
        assert explorer.visitors.total_pages == 3

    @pytest.mark.asyncio
    async def test_toggle_opens_and_closes_detail(self, explorer, fake_api):
        await explorer.load_visitors()

        await explorer.toggle_visitor("10.0.0.1")
        assert explorer.selected_ip == "10.0.0.1"
        assert explorer.history.total_pages == 3
        assert fake_api.paths()[-1] == ("/visitors/stats/ip/10.0.0.1", "1")

        await explorer.toggle_visitor("10.0.0.1")
        assert explorer.selected_ip is None
        assert explorer.detail is None
        assert explorer.history.total_items == 0

    @pytest.mark.asyncio
    async def test_switching_visitor_resets_history_page(self, explorer, fake_api):
        await explorer.load_visitors()
        await explorer.toggle_visitor("10.0.0.1")
        await explorer.change_detail_page(3)
        assert explorer.history.page == 3

        await explorer.toggle_visitor("10.0.0.2")

        assert explorer.history.page == 1
        assert fake_api.paths()[-1] == ("/visitors/stats/ip/10.0.0.2", "1")

    @pytest.mark.asyncio
    async def test_outer_page_change_closes_detail(self, explorer, fake_api):
        await explorer.load_visitors()
        await explorer.toggle_visitor("10.0.0.1")
        await explorer.change_detail_page(2)

        assert await explorer.change_page(2) is True

        assert explorer.selected_ip is None
        assert explorer.history.page == 1
        assert explorer.visitors.page == 2
        assert [v.ip for v in explorer.stats.recent_visitors] == ["10.0.0.3", "10.0.0.4"]
        assert fake_api.paths()[-1] == ("/visitors/stats", "2")

    @pytest.mark.asyncio
    async def test_out_of_range_pages_are_ignored(self, explorer, fake_api):
        await explorer.load_visitors()
        await explorer.toggle_visitor("10.0.0.1")
        count = len(fake_api.requests)

        assert await explorer.change_page(0) is False
        assert await explorer.change_page(4) is False
        assert await explorer.change_detail_page(4) is False

        assert len(fake_api.requests) == count
        assert explorer.selected_ip == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_detail_page_without_selection_is_ignored(self, explorer):
        await explorer.load_visitors()
        assert await explorer.change_detail_page(1) is False

    @pytest.mark.asyncio
    async def test_detail_failure_keeps_selection_without_data(self, explorer, fake_api):
        await explorer.load_visitors()
        fake_api.fail_detail = True

        await explorer.toggle_visitor("10.0.0.1")

        assert explorer.selected_ip == "10.0.0.1"
        assert explorer.detail is None
        assert explorer.detail_loading is False

    @pytest.mark.asyncio
    async def test_load_failure_keeps_previous_snapshot(self, make_api):
        responses = [envelope(visitors_page(1)), httpx.Response(503)]
        api = make_api(lambda request: responses.pop(0))
        explorer = VisitorExplorer(AnalyticsService(api, CatalogService(api)), visitor_page_size=VISITORS_PER_PAGE)

        first = await explorer.load_visitors()
        second = await explorer.load_visitors()

        assert second is first

    @pytest.mark.asyncio
    async def test_undecodable_response_degrades(self, make_api):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.DecodingError("corrupt gzip stream", request=request)

        api = make_api(handler)
        explorer = VisitorExplorer(AnalyticsService(api, CatalogService(api)))

        assert await explorer.load_visitors() is None
        await explorer.toggle_visitor("10.0.0.1")
        assert explorer.detail is None

    @pytest.mark.asyncio
    async def test_reset(self, explorer):
        await explorer.load_visitors()
        await explorer.toggle_visitor("10.0.0.1")

        explorer.reset()

        assert explorer.stats is None
        assert explorer.selected_ip is None
        assert explorer.visitors.total_items == 0


class TestAnalyticsService:
    @pytest.mark.asyncio
    async def test_product_stats(self, make_api):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return envelope({
                "totalProducts": 3,
                "totalClicks": 40,
                "topProducts": [{"name": "Clear Case", "clickCount": 30, "amazonLink": "https://a"}],
            })

        api = make_api(handler)
        stats = await AnalyticsService(api, CatalogService(api)).product_stats()

        assert api_path(seen[0]) == "/products/admin/stats"
        assert stats.total_clicks == 40
        assert stats.top_products[0].click_count == 30

    @pytest.mark.asyncio
    async def test_visitor_detail_encodes_ip(self, make_api):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return envelope({"visits": []})

        api = make_api(handler)
        detail = await AnalyticsService(api, CatalogService(api)).visitor_detail("::1", 2, 10)

        assert seen[0].url.raw_path.startswith(b"/api/visitors/stats/ip/%3A%3A1")
        assert detail.ip == "::1"

    @pytest.mark.asyncio
    async def test_dashboard_summary_from_product_list(self, make_api):
        rows = [
            {"_id": "a", "name": "A", "clickCount": 5, "isActive": True, "createdAt": "2026-10-01T00:00:00Z"},
            {"_id": "b", "name": "B", "clickCount": 9, "isActive": False, "featured": True,
             "createdAt": "2026-10-03T00:00:00Z"},
            {"_id": "c", "name": "C", "clickCount": 1, "isActive": True, "createdAt": "2026-10-02T00:00:00Z"},
        ]
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return envelope(rows)

        api = make_api(handler)
        summary = await AnalyticsService(api, CatalogService(api)).dashboard_summary(size=2)

        assert seen[0].url.params["limit"] == "100"
        assert (summary.total_products, summary.total_clicks) == (3, 15)
        assert (summary.active_products, summary.featured_products) == (2, 1)
        assert [p.id for p in summary.top_products] == ["b", "a"]
        assert [p.id for p in summary.recent_products] == ["b", "c"]

    @pytest.mark.asyncio
    async def test_non_object_detail_is_a_failure(self, make_api):
        api = make_api(lambda request: envelope(["not", "a", "visitor"]))
        with pytest.raises(ApiFailure, match="Failed to load visitor detail"):
            await AnalyticsService(api, CatalogService(api)).visitor_detail("10.0.0.1", 1, 10)

    @pytest.mark.asyncio
    async def test_malformed_stats_are_a_failure(self, make_api):
        api = make_api(lambda request: envelope({"totalVisits": "many"}))
        with pytest.raises(ApiFailure, match="Failed to load visitor stats"):
            await AnalyticsService(api, CatalogService(api)).visitor_stats(1, 10)

    def test_empty_summary(self):
        summary = DashboardSummary.from_products([])
        assert summary.total_products == 0
        assert summary.top_products == []

    def test_products_without_dates_sort_last(self):
        products = [
            Product.model_validate({"_id": "old", "name": "Old"}),
            Product.model_validate({"_id": "new", "name": "New", "createdAt": "2026-10-01T00:00:00Z"}),
        ]
        assert [p.id for p in DashboardSummary.from_products(products).recent_products] == ["new", "old"]


class TestFormatting:
    def test_truncate_user_agent(self):
        short = "curl/8.0"
        long = "Mozilla/5.0 " * 10
        assert truncate_user_agent(short) == short
        assert truncate_user_agent(long) == long[:60] + "..."
        assert truncate_user_agent("x" * 60) == "x" * 60

    def test_format_timestamp(self):
        assert format_timestamp("2026-10-17T14:05:00Z") == "17 Oct 2026, 02:05 PM"

    def test_format_timestamp_passthrough(self):
        assert format_timestamp("") == ""
        assert format_timestamp("yesterday") == "yesterday"
