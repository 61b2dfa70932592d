"""Flask web application for Stack Builder."""

import logging
import os

from flask import Flask, jsonify, request, session

from stack_builder.core.config import get_flask_secret, get_log_level, load_environment
from stack_builder.core.session import InMemorySessionStore
from stack_builder.shared.async_utils import run_coroutine
from stack_builder.shared.logging import setup_logging
from stack_builder.shared.tracing import configure_tracing
from stack_builder.shared.metrics import configure_metrics
from stack_builder.web.interface import WebInterface
from stack_builder.web.handlers import WebHandlers
from stack_builder.web.session_tracing import end_session_span, session_scope

# Load environment and configure Flask
load_environment()

setup_logging(
    name="stack_builder_web",
    level=get_log_level(),
    service_name="stack-builder-web",
)

# Configure OpenTelemetry traces and metrics (OTLP/gRPC, only when ENABLE_OTEL=true)
configure_tracing(service_name="stack-builder-web")
configure_metrics()

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = get_flask_secret()

# Initialize shared components
session_store = InMemorySessionStore()
web_interface = WebInterface(session_store)
handlers = WebHandlers(web_interface)


def _session_id() -> str:
    """Return the wizard session id from the cookie session, creating one if needed."""
    session_id = session.get('session_id')
    if not session_id:
        session_id = os.urandom(16).hex()
        session['session_id'] = session_id
    return session_id


@app.route('/api/catalog', methods=['GET'])
def catalog():
    """Return the option catalog and assessment configuration."""
    try:
        return jsonify(handlers.handle_catalog())
    except Exception as e:
        return jsonify({'error': str(e)}), 500


@app.route('/api/state', methods=['GET'])
def state():
    """Return the derived state of the current session."""
    session_id = _session_id()
    with session_scope(session_id):
        try:
            return jsonify(handlers.handle_state(session_id))
        except Exception as e:
            return jsonify({'error': str(e)}), 500


@app.route('/api/toggle', methods=['POST'])
def toggle():
    """Toggle an option."""
    data = request.get_json(silent=True) or {}
    session_id = _session_id()

    with session_scope(session_id):
        try:
            result = run_coroutine(handlers.handle_toggle(session_id, data))
            if 'error' in result:
                return jsonify(result), 400
            return jsonify(result)
        except Exception as e:
            return jsonify({'error': str(e)}), 500


@app.route('/api/connect', methods=['POST'])
def connect():
    """Move to the contact step when enough categories are covered."""
    session_id = _session_id()
    with session_scope(session_id):
        try:
            return jsonify(run_coroutine(handlers.handle_connect(session_id)))
        except Exception as e:
            return jsonify({'error': str(e)}), 500


@app.route('/api/select', methods=['POST'])
def select():
    """Go back to stack selection."""
    session_id = _session_id()
    with session_scope(session_id):
        try:
            return jsonify(run_coroutine(handlers.handle_select(session_id)))
        except Exception as e:
            return jsonify({'error': str(e)}), 500


@app.route('/api/submit', methods=['POST'])
def submit():
    """Submit the contact form."""
    session_id = session.get('session_id')

    if not session_id:
        return jsonify({'error': 'No active session'}), 400

    data = request.get_json(silent=True) or {}
    with session_scope(session_id):
        try:
            response = run_coroutine(handlers.handle_submit(session_id, data))
            return jsonify(response.to_dict()), response.status_code
        except Exception as e:
            return jsonify({'error': str(e)}), 500


@app.route('/api/reset', methods=['POST'])
def reset():
    """Reset the wizard session."""
    session_id = session.get('session_id')
    try:
        result = {'status': 'reset'}
        if session_id:
            with session_scope(session_id):
                result = run_coroutine(handlers.handle_reset(session_id))
            # Engine is reset in place, so the cookie keeps its session id.
            end_session_span(session_id)
        return jsonify(result)
    except Exception as e:
        return jsonify({'error': str(e)}), 500


@app.route('/api/submission', methods=['GET'])
def submission():
    """Get the stored contact submission for the current session."""
    session_id = session.get('session_id')
    if not session_id:
        return jsonify({'error': 'No active session'}), 400

    with session_scope(session_id):
        try:
            result = handlers.handle_get_submission(session_id)
            if 'error' in result:
                return jsonify(result), 404
            return jsonify(result)
        except Exception as e:
            return jsonify({'error': str(e)}), 500


@app.route('/api/submissions', methods=['GET'])
def submissions():
    """Get all stored contact submissions across sessions."""
    try:
        return jsonify(handlers.handle_get_all_submissions())
    except Exception as e:
        logger.error(f"Error retrieving submissions: {e}")
        return jsonify({'error': str(e), 'submissions': [], 'count': 0}), 500


@app.route('/health')
def health():
    """Health check endpoint."""
    return jsonify({'status': 'healthy'})


if __name__ == '__main__':
    from stack_builder.core.config import get_port

    app.run(host='0.0.0.0', port=get_port(), debug=False)
