"""
Flask web UI for the image settings dialog.

The browser page renders the width/height inputs, the ratio lock toggle and
the alt text fields; every change goes through the JSON API below, which
drives the ImageSettingsSession.
"""
import logging
import socket
import threading
from typing import Optional

from flask import Flask, jsonify, request, send_file

from image_settings.core.dimensions import DIMENSION_FIELDS
from image_settings.core.resize import EngineNotInitializedError
from image_settings.editor.session import ImageSettingsSession, SaveDisabledError

logger = logging.getLogger(__name__)

# Disable Flask development server warning
logging.getLogger('werkzeug').setLevel(logging.ERROR)

PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Image Settings</title>
<style>
    body { font-family: sans-serif; max-width: 720px; margin: 2em auto; }
    img { max-width: 100%; border: 1px solid #ccc; }
    fieldset { margin-top: 1em; }
    input[type=number] { width: 7em; }
    #status { color: #555; margin-top: 1em; }
</style>
</head>
<body>
<h1>Image Settings</h1>
<img id="preview" src="/api/image" alt="">
<fieldset>
    <legend>Image dimensions</legend>
    <input id="width" type="number" min="0"> x
    <input id="height" type="number" min="0">
    <label><input id="locked" type="checkbox"> Lock aspect ratio</label>
</fieldset>
<fieldset>
    <legend>Accessibility</legend>
    <input id="alt" type="text" placeholder="Alt text">
    <label><input id="decorative" type="checkbox"> This image is decorative</label>
</fieldset>
<button id="save">Save</button>
<div id="status"></div>
<script>
async function post(url, body) {
    const response = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body || {})
    });
    return response.json();
}

function render(data) {
    const status = document.getElementById('status');
    if (data.error && !data.state) {
        status.textContent = data.error;
        return;
    }
    const state = data.state || data;
    if (state.dimensions) {
        document.getElementById('width').value = state.dimensions.width;
        document.getElementById('height').value = state.dimensions.height;
    }
    document.getElementById('locked').checked = state.is_locked;
    document.getElementById('decorative').checked = state.is_decorative;
    document.getElementById('save').disabled = state.save_disabled;
    status.textContent = data.error || state.message || '';
}

async function updateStatus() {
    const response = await fetch('/api/status');
    const data = await response.json();
    render(data);
    document.getElementById('alt').value = data.alt_text;
}

for (const field of ['width', 'height']) {
    const input = document.getElementById(field);
    input.addEventListener('input', () => post('/api/dimensions/' + field, {value: input.value}));
    input.addEventListener('blur', async () => render(await post('/api/dimensions/apply')));
}
document.getElementById('locked').addEventListener('change', async (e) => {
    render(await post('/api/lock/' + (e.target.checked ? 'yes' : 'no')));
});
document.getElementById('alt').addEventListener('input', async (e) => {
    render(await post('/api/alt_text', {value: e.target.value}));
});
document.getElementById('decorative').addEventListener('change', async (e) => {
    render(await post('/api/alt_text', {is_decorative: e.target.checked}));
});
document.getElementById('save').addEventListener('click', async () => {
    render(await post('/api/save'));
});
updateStatus();
</script>
</body>
</html>
"""


class AppState:
    """Shared state between the main thread and the webserver"""
    def __init__(self, session: ImageSettingsSession):
        self.session = session
        self.status = "loading"
        self.message = "Waiting for image..."
        self.settings = None
        self.lock = threading.Lock()

    def update(self, **kwargs):
        """Thread-safe update of state"""
        with self.lock:
            for key, value in kwargs.items():
                setattr(self, key, value)

    def get(self, key):
        """Thread-safe get of state value"""
        with self.lock:
            return getattr(self, key)

    def get_dict(self):
        """Get a thread-safe copy of state as dict"""
        with self.lock:
            return self._snapshot()

    def _snapshot(self):
        data = self.session.to_dict()
        data.update({
            'status': self.status,
            'message': self.message,
            'settings': self.settings.to_dict() if self.settings else None,
        })
        return data


def find_free_port():
    """Find a free port for the webserver"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('', 0))
        s.listen(1)
        port = s.getsockname()[1]
    return port


def _error(message: str, status_code: int, state: Optional[AppState] = None):
    body = {'success': False, 'error': message}
    if state is not None:
        body['state'] = state._snapshot()
    return jsonify(body), status_code


def create_app(state: AppState) -> Flask:
    """Create Flask app with routes"""
    app = Flask(__name__)

    @app.route('/')
    def index():
        return PAGE

    @app.route('/api/status')
    def api_status():
        """Status API endpoint"""
        return jsonify(state.get_dict())

    @app.route('/api/image')
    def api_image():
        """Serve the image being edited"""
        source = state.session.source
        path = source.get_path() if source else None
        if path is not None and path.exists():
            return send_file(path.resolve())
        return "Not found", 404

    @app.route('/api/dimensions/<field>', methods=['POST'])
    def api_dimension(field):
        """Reflect a keystroke in the width or height input"""
        if field not in DIMENSION_FIELDS:
            return _error(f"Unknown dimension field: {field}", 400)
        data = request.get_json(silent=True) or {}
        with state.lock:
            try:
                state.session.set_dimension(field, data.get('value'))
            except EngineNotInitializedError as e:
                return _error(str(e), 409)
            return jsonify({'success': True, 'state': state._snapshot()})

    @app.route('/api/dimensions/apply', methods=['POST'])
    def api_apply_dimensions():
        """Commit the typed dimensions, snapping them when the ratio is locked"""
        with state.lock:
            try:
                state.session.update_dimensions()
            except EngineNotInitializedError as e:
                return _error(str(e), 409)
            return jsonify({'success': True, 'state': state._snapshot()})

    @app.route('/api/lock/<choice>', methods=['POST'])
    def api_lock(choice):
        """Turn the aspect ratio lock on or off"""
        with state.lock:
            if choice.lower() in ('yes', 'true', '1', 'on'):
                state.session.lock()
            else:
                state.session.unlock()
            return jsonify({'success': True, 'state': state._snapshot()})

    @app.route('/api/alt_text', methods=['POST'])
    def api_alt_text():
        """Update alt text and/or the decorative flag"""
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _error("Expected a JSON object", 400)
        # validate both fields before touching the session
        if data.get('value') is not None and not isinstance(data['value'], str):
            return _error("Alt text must be a string", 400)
        if 'is_decorative' in data and not isinstance(data['is_decorative'], bool):
            return _error("is_decorative must be true or false", 400)
        with state.lock:
            if 'value' in data:
                state.session.set_alt_text(data['value'])
            if 'is_decorative' in data:
                state.session.set_decorative(data['is_decorative'])
            return jsonify({'success': True, 'state': state._snapshot()})

    @app.route('/api/save', methods=['POST'])
    def api_save():
        """Save the settings back to the editor"""
        with state.lock:
            try:
                settings = state.session.save()
            except SaveDisabledError as e:
                return _error(str(e), 400, state)
            except EngineNotInitializedError as e:
                return _error(str(e), 409, state)
            state.settings = settings
            state.status = "saved"
            state.message = "Settings saved"
            return jsonify({'success': True, 'settings': settings.to_dict(), 'state': state._snapshot()})

    return app


def run_flask_server(app: Flask, host: str, port: int):
    """Run Flask server in thread"""
    logger.info("Serving image settings UI on http://%s:%d", host, port)
    app.run(host=host, port=port, debug=False, use_reloader=False)
