"""Tests for the composition root."""

from orderflow.infrastructure import bootstrap
from orderflow.infrastructure.config import Settings


def _settings(tmp_path):
    return Settings(data_dir=tmp_path, notification_latency_seconds=0)


class TestBootstrap:

    def test_order_repository_reuses_given_repositories(self, tmp_path):
        settings = _settings(tmp_path)
        users = bootstrap.user_repository(settings)
        products = bootstrap.product_repository(settings)
        orders = bootstrap.order_repository(settings, user_repo=users, product_repo=products)
        assert orders._user_repo is users
        assert orders._product_repo is products

    def test_scheduler_shares_the_given_order_repository(self, tmp_path):
        settings = _settings(tmp_path)
        orders = bootstrap.order_repository(settings)
        scheduler = bootstrap.progression_scheduler(settings, order_repo=orders)
        assert scheduler._handler._order_repo is orders

    def test_scheduler_uses_configured_intervals(self, tmp_path):
        settings = Settings(
            data_dir=tmp_path,
            pending_scan_interval_seconds=7,
            confirmed_scan_interval_seconds=9,
            scheduler_enabled=False,
        )
        scheduler = bootstrap.progression_scheduler(settings)
        assert scheduler.pending_interval == 7
        assert scheduler.confirmed_interval == 9
        assert not scheduler.enabled
        assert (tmp_path / "orders.json").exists()
