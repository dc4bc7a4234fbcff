"""Integration tests for application lifecycle and fault translation."""

from fastapi.testclient import TestClient

from src.user_service.api.http.app import create_app
from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.core.services import DbSessionService
from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.context import with_context


def _production_config() -> ConfigData:
    config = ConfigData()
    config.app.environment = "production"
    return config


class TestLifecycle:
    def test_owned_database_service_is_created_and_disposed(self, tmp_path, monkeypatch):
        disposed = []
        monkeypatch.setattr(
            DbSessionService, "dispose", lambda self: disposed.append(self)
        )
        config = ConfigData()
        config.database.url = f"sqlite:///{tmp_path}/users.db"

        with with_context(config):
            app = create_app()

        with TestClient(app) as client:
            service = app.state.app_dependencies.database_service
            assert service.engine.url.database.endswith("users.db")
            assert client.get("/health/ready").status_code == 200

        assert disposed == [service]

    def test_injected_database_service_is_left_open(
        self, database_service: DbSessionService, monkeypatch
    ):
        disposed = []
        monkeypatch.setattr(
            DbSessionService, "dispose", lambda self: disposed.append(self)
        )
        app = create_app(ApplicationDependencies(database_service=database_service))

        with TestClient(app):
            pass

        assert disposed == []

    def test_startup_survives_unreachable_database(self, unreachable_client: TestClient):
        assert unreachable_client.get("/health").status_code == 200

    def test_startup_logs_connection(self, database_service, app_factory, log_messages):
        with TestClient(app_factory(database_service)):
            pass

        assert any(message.startswith("Connected to database") for message in log_messages)


class TestHealth:
    def test_liveness(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "api"}

    def test_readiness(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_readiness_when_database_unreachable(self, unreachable_client: TestClient):
        response = unreachable_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["database"]["status"] == "unhealthy"


class TestRequestLogging:
    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/get-users")

        assert response.headers["X-Request-ID"]

    def test_request_id_is_propagated(self, client: TestClient):
        response = client.get("/get-users", headers={"X-Request-ID": "abc"})

        assert response.headers["X-Request-ID"] == "abc"


class TestFaultTranslation:
    def test_development_exposes_error_text(self, schemaless_client: TestClient):
        response = schemaless_client.get("/get-users")

        assert response.status_code == 500
        assert "no such table: users" in response.json()["detail"]

    def test_production_hides_error_text(self, app_factory):
        with with_context(_production_config()):
            app = app_factory(DbSessionService(engine=_schemaless_engine()))

        with TestClient(app) as client:
            response = client.post("/add-user", json={"first_name": "John"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal Server Error"

    def test_unexpected_errors_become_opaque_faults(
        self, database_service: DbSessionService, app_factory
    ):
        app = app_factory(database_service)

        @app.get("/boom")
        def boom():
            raise RuntimeError("unexpected")

        with TestClient(app) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal Server Error"

    def test_production_disables_docs(self, database_service: DbSessionService, app_factory):
        with with_context(_production_config()):
            app = app_factory(database_service)

        with TestClient(app) as client:
            assert client.get("/docs").status_code == 404


def _schemaless_engine():
    from sqlalchemy import StaticPool
    from sqlmodel import create_engine

    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
