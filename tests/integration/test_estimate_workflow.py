"""
Integration tests for the full estimate workflow: controller, async
save/export service, session state and factory wiring.
"""

import threading
from unittest.mock import MagicMock

import pytest

from estimator.application import EstimateController, EstimateService
from estimator.domain.exceptions import PersistenceFailure, ValidationError
from estimator.domain.models import Category, Tier, VanitySelection, KitchenSelection
from estimator.domain.models.config import AppConfig
from estimator.infrastructure.factory import create_controller, create_estimate_service, quick_setup
from estimator.presentation.state import SessionManager


class InMemoryRepository:
    """Dict-backed EstimateRepository"""

    def __init__(self):
        self.rows = {}
        self.next_id = 1

    def save(self, record, estimate_id=None):
        if estimate_id is None:
            estimate_id = str(self.next_id)
            self.next_id += 1
        self.rows[estimate_id] = record.to_dict()
        return estimate_id

    def get(self, estimate_id):
        from estimator.domain.models import EstimateRecord

        data = self.rows.get(estimate_id)
        return EstimateRecord.from_dict({**data, "id": estimate_id}) if data else None

    def delete(self, estimate_id):
        return self.rows.pop(estimate_id, None) is not None


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def service(repository):
    service = EstimateService(repository, max_workers=1)
    yield service
    service.shutdown()


class TestKioskSession:
    """A customer building a whole estimate"""

    def test_full_estimate(self, controller):
        controller.add(Category.CABINETS, "B12 Base", 6)
        controller.add(Category.CABINETS, "W3030 Wall", 6)
        controller.add(Category.FLOORING, "Porcelain Tile", "240")
        controller.add(Category.COUNTERTOPS, "Quartz", "18.5")
        controller.add(Category.HARDWARE, "Bar Pull 5in", 24)
        controller.add(Category.VANITIES, VanitySelection(tier=Tier.BETTER, plumbing_wall_change=True), 1)
        controller.add(Category.KITCHENS, KitchenSelection(tier=Tier.GOOD), 1)
        controller.set_installation_requested(True)

        totals = controller.totals()
        expected_subtotal = (
            6 * 189.0 + 6 * 150.0 + 240 * 6.5 + 18.5 * 85.0 + 24 * 6.5 + (3100 + 450) + 9500
        )

        assert totals.total_cabinet_quantity == 12
        assert totals.markup.rate == 0.35
        assert totals.subtotal == pytest.approx(expected_subtotal)
        assert totals.grand_total == pytest.approx(expected_subtotal * (1 + 0.35 + 0.15))

    def test_edit_and_undo_round_trip(self, controller):
        controller.add(Category.FLOORING, "Oak Laminate", 100)
        controller.add(Category.FLOORING, "Porcelain Tile", 50)

        controller.start_edit(Category.FLOORING, 1)
        controller.type_value("0.05")
        with pytest.raises(ValidationError):
            controller.commit()
        controller.type_value("0.1")
        controller.commit()
        assert controller.items(Category.FLOORING)[1].square_feet == 0.1

        controller.clear(Category.FLOORING)
        controller.undo()
        assert [i.square_feet for i in controller.items(Category.FLOORING)] == [100, 0.1]


class TestEstimateService:
    """Background save/export"""

    def test_save_and_load(self, controller, catalog, service):
        controller.add(Category.CABINETS, "B12 Base", 2)
        controller.set_installation_requested(True)

        estimate_id = service.save_async(controller).result(timeout=5)

        restored = EstimateController(catalog)
        assert service.load_into(restored, estimate_id) is True
        assert restored.items(Category.CABINETS) == controller.items(Category.CABINETS)
        assert restored.totals().grand_total == pytest.approx(controller.totals().grand_total)

    def test_snapshot_taken_before_background_save(self, controller):
        gate = threading.Event()
        saved = []

        class SlowRepository(InMemoryRepository):
            def save(self, record, estimate_id=None):
                gate.wait(timeout=5)
                saved.append(record)
                return "1"

        service = EstimateService(SlowRepository(), max_workers=1)
        try:
            controller.add(Category.CABINETS, "B12 Base", 2)
            future = service.save_async(controller)
            controller.add(Category.CABINETS, "B15 Base", 1)
            gate.set()
            future.result(timeout=5)
        finally:
            service.shutdown()

        assert saved[0].item_count() == 1
        assert len(controller.items(Category.CABINETS)) == 2

    def test_save_failure_surfaces_on_future(self, controller):
        repository = MagicMock()
        repository.save.side_effect = RuntimeError("database is down")
        service = EstimateService(repository, max_workers=1)
        try:
            controller.add(Category.CABINETS, "B12 Base", 2)
            future = service.save_async(controller)

            with pytest.raises(PersistenceFailure):
                future.result(timeout=5)
        finally:
            service.shutdown()

        assert len(controller.items(Category.CABINETS)) == 1

    def test_load_missing(self, controller, service):
        controller.add(Category.CABINETS, "B12 Base", 2)

        assert service.load_into(controller, "404") is False
        assert len(controller.items(Category.CABINETS)) == 1

    def test_export_to_sink(self, controller, service):
        controller.add(Category.COUNTERTOPS, "Quartz", 10)
        received = []

        payload = service.export_async(controller, sink=received.append).result(timeout=5)

        assert received == [payload]
        assert b"Quartz" in payload
        assert b"Grand Total" in payload

    def test_cancel_pending(self, controller):
        gate = threading.Event()

        class BlockingRepository(InMemoryRepository):
            def save(self, record, estimate_id=None):
                gate.wait(timeout=5)
                return "1"

        service = EstimateService(BlockingRepository(), max_workers=1)
        try:
            running = service.save_async(controller)
            queued = service.save_async(controller)

            assert service.cancel(queued) is True
            assert queued.cancelled()
        finally:
            gate.set()
            service.shutdown()
        assert running.result(timeout=5) == "1"


class TestSessionManager:
    """Per-session controller storage"""

    def test_controller_created_once(self, catalog):
        session_state = {}
        manager = SessionManager(session_state, lambda: EstimateController(catalog))

        first = manager.get_controller()
        first.add(Category.CABINETS, "B12 Base", 1)

        assert manager.get_controller() is first
        assert SessionManager.KEY in session_state

    def test_new_estimate(self, catalog):
        manager = SessionManager({}, lambda: EstimateController(catalog))
        manager.get_controller().add(Category.CABINETS, "B12 Base", 1)
        manager.set_estimate_id("9")
        manager.set_last_error("Failed to save estimate")

        controller = manager.new_estimate()

        assert controller.store.is_empty
        assert manager.get_estimate_id() is None
        assert manager.get_last_error() is None


class TestFactory:
    """Wiring from AppConfig"""

    def test_create_controller_uses_config(self, catalog):
        config = AppConfig(pricing={"installation_rate": 0.2})
        controller = create_controller(config, catalog)

        controller.add(Category.CABINETS, "B12 Base", 10)
        controller.set_installation_requested(True)
        assert controller.totals().installation_cost == pytest.approx(189.0 * 10 * 0.2)

    def test_quick_setup(self, repository):
        components = quick_setup(AppConfig.for_testing(), repository=repository)

        assert set(components) == {"config", "catalog", "service", "controller"}
        assert components["catalog"].names(Category.CABINETS) == []
        components["service"].shutdown()

    def test_create_estimate_service(self, repository):
        service = create_estimate_service(AppConfig.for_testing(), repository=repository)
        assert service.max_workers == 1
        assert service.repository is repository
        service.shutdown()
