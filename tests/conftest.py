"""
Pytest configuration and fixtures for image-settings tests.

Provides loaded sessions, test image files, a Flask test client and a live
web server on a free port.
"""

import pytest
import requests
import threading
import time
from pathlib import Path
from typing import Any, Dict, Generator, List

from werkzeug.serving import make_server

from image_settings.core.alt_text import ImageSettings
from image_settings.editor.server import AppState, create_app, find_free_port
from image_settings.editor.session import ImageSettingsSession
from image_settings.loading import PillowImageSource
from tests.helpers import image_generator as ig
from tests.helpers.api_helper import api_client  # noqa: F401
from tests.mocks.mock_image_source import MockImageSource


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    """A 1920x1080 PNG on disk."""
    return ig.create_image(tmp_path / "photo.png", 1920, 1080)


@pytest.fixture
def saved_settings() -> List[ImageSettings]:
    """Collects everything passed to the session's save callback."""
    return []


@pytest.fixture
def session(saved_settings: List[ImageSettings]) -> ImageSettingsSession:
    """Session with a mocked 1920x1080 image already loaded."""
    session = ImageSettingsSession(save_to_editor=saved_settings.append)
    session.on_image_load(MockImageSource(dimensions=(1920, 1080)))
    return session


@pytest.fixture
def app_state(session: ImageSettingsSession) -> AppState:
    state = AppState(session)
    state.update(status="ready", message="Edit the image settings and press Save")
    return state


@pytest.fixture
def flask_client(app_state: AppState):
    """Flask test client bound to app_state."""
    app = create_app(app_state)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def settings_server(
    image_file: Path,
    saved_settings: List[ImageSettings]
) -> Generator[Dict[str, Any], None, None]:
    """
    Run the web UI on a free port and yield connection info.

    Yields dict with:
        - state: AppState behind the server
        - port: Port number
        - base_url: Base URL for API calls
    """
    session = ImageSettingsSession(save_to_editor=saved_settings.append)
    session.on_image_load(PillowImageSource(image_file))
    state = AppState(session)
    state.update(status="ready")

    port = find_free_port()
    server = make_server('127.0.0.1', port, create_app(state), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    base_url = f"http://127.0.0.1:{port}"
    max_wait = 10
    wait_interval = 0.1
    elapsed = 0.0
    while elapsed < max_wait:
        try:
            if requests.get(f"{base_url}/api/status", timeout=1).status_code == 200:
                break
        except requests.exceptions.RequestException:
            pass
        time.sleep(wait_interval)
        elapsed += wait_interval
    else:
        server.shutdown()
        pytest.fail(f"Flask server didn't start within {max_wait}s")

    try:
        yield {"state": state, "port": port, "base_url": base_url}
    finally:
        server.shutdown()
        thread.join(timeout=5)
