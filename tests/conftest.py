# pyright: reportUnknownVariableType=false
# pyright: reportUnknownMemberType=false
# pyright: reportAttributeAccessIssue=false
import logging
import time
import uuid
from collections.abc import Generator
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from python_on_whales import DockerClient
from python_on_whales.components.container.cli_wrapper import Container
from python_on_whales.exceptions import DockerException, NoSuchContainer
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.database import Base
from app.deps import get_db, get_storage
from app.main import app
from tests.fakes import FakeStorage

# Configure basic logging for tests
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Database Fixture (Overrides get_db dependency)
@pytest.fixture
def session() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def client(session: Session, storage: FakeStorage) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Docker fixtures for e2e tests ---


def _host_port(docker: DockerClient, container_name: str) -> str | None:
    """Return the host port mapped to container port 8000, if any."""
    try:
        ports = docker.container.inspect(container_name).network_settings.ports
        bindings = (ports or {}).get("8000/tcp") or []
    except (AttributeError, TypeError, DockerException) as e:
        logger.warning("Error extracting host port for %s: %s", container_name, e)
        return None
    if not bindings:
        logger.warning("Port 8000/tcp not mapped in %s.", container_name)
        return None
    return bindings[0].get("HostPort")


def _wait_until_listing_works(base_url: str, max_wait: int = 30) -> None:
    """Poll GET /photos until the server answers."""
    deadline = time.time() + max_wait
    with httpx.Client(base_url=base_url, timeout=2.0) as http:
        while time.time() < deadline:
            try:
                http.get("/photos").raise_for_status()
            except httpx.HTTPError as err:
                logger.info("Server at %s not ready yet (%s)", base_url, err)
            else:
                logger.info("Server at %s is ready.", base_url)
                return
            time.sleep(1)
    pytest.fail(f"Server at {base_url} did not become ready within {max_wait} seconds.")


def _stop_container(container: Container, container_name: str) -> None:
    try:
        logger.info("Container logs for %s:\n%s", container_name, container.logs())
    except DockerException as log_err:
        logger.warning("Failed to retrieve logs for %s: %s", container_name, log_err)
    try:
        container.stop()
        container.remove()
    except NoSuchContainer:
        logger.warning("Container %s already removed.", container_name)
    except DockerException:
        logger.exception("Error stopping container %s", container_name)


@pytest.fixture(scope="session")
def docker() -> DockerClient:
    """Provide a Docker client, checking if the daemon is running."""
    client = DockerClient()
    try:
        client.system.info()
    except DockerException as e:
        pytest.fail(f"Docker daemon not running or inaccessible: {e}.")
    return client


@pytest.fixture(scope="session")
def docker_image(docker: DockerClient) -> Generator[str, None, None]:
    """Build the backend image once per session."""
    image_tag = f"photo-share-backend-test:{uuid.uuid4()}"
    project_root = Path(__file__).parent.parent
    logger.info("Building Docker image: %s...", image_tag)
    try:
        docker.build(context_path=project_root, tags=image_tag)
    except DockerException as e:
        pytest.fail(f"Docker build failed: {e}")
    yield image_tag
    try:
        docker.image.remove(image_tag, force=True)
    except DockerException as e:
        logger.warning("Failed to remove Docker image %s: %s", image_tag, e)


@pytest.fixture
def live_server_url(
    docker: DockerClient, docker_image: str
) -> Generator[str, None, None]:
    """Run the backend image (filesystem storage) for one test."""
    container_name = f"photo-share-test-{uuid.uuid4()}"
    try:
        container = docker.run(
            image=docker_image,
            detach=True,
            publish=[(8000,)],
            name=container_name,
        )
    except DockerException as e:
        pytest.fail(f"Could not start container {container_name}: {e}")
    assert isinstance(container, Container)
    try:
        host_port = _host_port(docker, container_name)
        if not host_port:
            pytest.fail(f"Could not determine host port for {container_name}")
        base_url = f"http://localhost:{host_port}"
        _wait_until_listing_works(base_url)
        yield base_url
    finally:
        _stop_container(container, container_name)
