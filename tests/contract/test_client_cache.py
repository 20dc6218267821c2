"""Contract tests for the API client and its explicit cache."""

import pytest

from rentbook.client import ApiError, RentbookCache, RentbookClient

TENANT = {
    "name": "Asha Rao",
    "roomNumber": "101",
    "contact": "555-0100",
    "rentAmount": 5000,
    "deposit": 10000,
    "joinDate": "2025-01-15",
}


@pytest.fixture
def api(client):
    return RentbookClient(client)


@pytest.fixture
def cache(api):
    return RentbookCache(api)


class TestRentbookClient:
    def test_round_trip(self, api):
        created = api.create_tenant(TENANT)
        assert api.get_tenant(created["id"])["name"] == "Asha Rao"
        assert [t["id"] for t in api.list_tenants()] == [created["id"]]

    def test_error_body_becomes_api_error(self, api):
        with pytest.raises(ApiError) as excinfo:
            api.get_tenant("missing")

        assert excinfo.value.status_code == 404
        assert excinfo.value.message == "Tenant not found"

    def test_record_filters_skip_none(self, api):
        api.create_tenant(TENANT)
        assert api.list_records(month=None, status="paid") == []

    def test_get_notice(self, api):
        notice = api.create_notice({"title": "Water off", "category": "maintenance", "content": "Sat 9-11"})

        fetched = api.get_notice(notice["id"])

        assert fetched["id"] == notice["id"]
        assert fetched["category"] == "maintenance"

    def test_list_month_options(self, api):
        assert len(api.list_month_options()) == 6

        options = api.list_month_options(count=3)
        assert len(options) == 3
        assert options[0]["month"] > options[1]["month"]
        assert set(options[0]) == {"month", "label"}

    def test_health(self, api):
        assert api.health() == {"status": "ok"}


class TestRentbookCache:
    """Test refetch-after-mutation and invalidation."""

    def test_starts_stale_and_loads_on_first_read(self, cache, api):
        api.create_tenant(TENANT)
        assert cache.stale is True

        assert len(cache.tenants) == 1
        assert cache.stale is False

    def test_mutation_refreshes(self, cache):
        assert cache.tenants == []

        created = cache.create_tenant(TENANT)
        assert [t["id"] for t in cache.tenants] == [created["id"]]

        cache.record_payment(
            created["id"], {"month": "2025-02", "amount": 5000, "date": "2025-02-03", "paid": "true"}
        )
        assert cache.find_tenant(created["id"])["rentHistory"][0]["paid"] is True

        cache.delete_tenant(created["id"])
        assert cache.tenants == []

    def test_changes_from_elsewhere_need_invalidate(self, cache, api):
        assert cache.tenants == []
        api.create_tenant(TENANT)

        assert cache.tenants == []
        cache.invalidate()
        assert len(cache.tenants) == 1

    def test_notice_mutations(self, cache):
        notice = cache.create_notice({"title": "Rent due", "category": "announcement", "content": "By the 5th"})
        assert [n["id"] for n in cache.notices] == [notice["id"]]

        cache.update_notice(notice["id"], {"title": "Rent due", "category": "update", "content": "By the 7th"})
        assert cache.notices[0]["content"] == "By the 7th"

        cache.delete_notice(notice["id"])
        assert cache.notices == []

    def test_failed_mutation_keeps_cache(self, cache):
        created = cache.create_tenant(TENANT)

        with pytest.raises(ApiError) as excinfo:
            cache.update_tenant(created["id"], {"rentAmount": -1})

        assert excinfo.value.status_code == 400
        assert cache.find_tenant(created["id"])["rentAmount"] == 5000
