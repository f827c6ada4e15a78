import logging

from flask import Flask, abort, flash, jsonify, render_template_string, request
from werkzeug.exceptions import HTTPException

from .config import ENV_PREFIX, DefaultConfig
from .fields import FIELD_SPECS, field_from_key
from .reporter import byte_count_label, char_count_label
from .session import Converter, copy_all_payload, copy_field_payload, field_snapshot
from .synchronizer import (
    SetByteCount,
    SetCharCount,
    SetFieldInvalid,
    SetFieldText,
    SetStatus,
    UIState,
    clear_transition,
    transition,
)

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <title>Base Converter - Text, Decimal, Binary, Hex, Octal</title>
    <style>
        body { font-family: 'Roboto', sans-serif; margin: 0; padding: 0;
            background: linear-gradient(135deg, #667eea, #764ba2); min-height: 100vh;
            color: #f1f1f1; display: flex; justify-content: center; align-items: center; }
        .container { background: rgba(0,0,0,0.75); border-radius: 12px; box-shadow: 0 8px 24px rgba(0,0,0,0.3);
            width: 760px; padding: 30px 40px 40px 40px; box-sizing: border-box; }
        h1 { margin-bottom: 10px; font-weight: 700; font-size: 2.2rem; letter-spacing: 1.2px; text-align: center; }
        label { display: block; margin-top: 18px; font-weight: 600; user-select: none; letter-spacing: 0.05em; }
        textarea { margin-top: 8px; padding: 10px 12px; font-size: 1rem; border-radius: 8px; border: 2px solid transparent;
            width: 100%; min-height: 54px; outline: none; box-sizing: border-box; font-family: monospace; }
        .row.is-invalid textarea { border-color: #ff4c4c; }
        .row-actions { display: flex; gap: 8px; margin-top: 6px; }
        button { background: #764ba2; color: #fff; cursor: pointer; font-weight: 700; letter-spacing: 0.08em;
            padding: 8px 14px; border: none; border-radius: 8px; }
        button:hover { background: #667eea; }
        .actions { display: flex; gap: 12px; margin-top: 24px; }
        .status { margin-top: 22px; display: flex; justify-content: space-between; font-family: 'Courier New', monospace; }
        .status-text.success { color: #a8ffc7; }
        .status-text.warning { color: #ffd479; }
        .status-text.error { color: #ff8080; font-weight: bold; }
        .toast { margin-top: 10px; padding: 10px 14px; border-radius: 8px; background: #222; }
        .toast.success { box-shadow: inset 0 0 10px #2ecc71; }
        .toast.error { box-shadow: inset 0 0 10px #ff0000; }
        .toast-icon { font-weight: 700; margin-right: 8px; }
        details { margin-top: 24px; color: #ccc; }
        footer { user-select: none; font-size: 0.9rem; text-align: center; color: #ccc; margin-top: 30px; }
    </style>
</head>
<body>
<div class="container">
    <h1>Base Converter</h1>
    {% for category, message in get_flashed_messages(with_categories=true) %}
        <div class="toast {{ category }}">
            <span class="toast-icon">{{ {'success': 'OK', 'error': 'ERR'}.get(category, 'INFO') }}</span>
            <span class="toast-message">{{ message }}</span>
        </div>
    {% endfor %}
    {% if error %}
        <div class="toast error">{{ error }}</div>
    {% endif %}
    <form method="post" novalidate>
        {% for spec in specs %}
        <div class="row{% if spec.field in state.invalid %} is-invalid{% endif %}" data-row="{{ spec.field.value }}">
            <label for="{{ spec.field.value }}-input">{{ spec.label }}</label>
            <textarea name="{{ spec.field.value }}" id="{{ spec.field.value }}-input">
{{ texts[spec.field] }}</textarea>
            <div class="row-actions">
                <button type="submit" name="action" value="convert:{{ spec.field.value }}">Convert from {{ spec.label }}</button>
                <button type="submit" name="action" value="copy:{{ spec.field.value }}">Copy</button>
            </div>
        </div>
        {% endfor %}
        <div class="actions">
            <button type="submit" name="action" value="clear">Clear</button>
            <button type="submit" name="action" value="copy-all">Copy all</button>
            <button type="submit" name="action" value="sample">Sample</button>
        </div>
    </form>
    {% if clipboard is not none %}
        <label for="clipboard">Copied text</label>
        <textarea id="clipboard" readonly>
{{ clipboard }}</textarea>
    {% endif %}
    <div class="status">
        <span class="{{ state.status.css_class }}">{{ state.status.message }}</span>
        <span id="byte-count">{{ byte_count }}</span>
        <span id="char-count">{{ char_count }}</span>
    </div>
    <details>
        <summary>Accepted formats</summary>
        <p>Numbers may be separated by spaces, commas or semicolons.
           Binary, hex and octal accept the 0b, 0x and 0o prefixes.
           One unbroken run of digits is split into groups of 8 binary,
           2 hex or 3 octal digits when its length allows it.
           Copy buttons show the copied text below the form.</p>
    </details>
</div>
<footer>
    &copy; 2025 Base Converter
</footer>
</body>
</html>
"""

_EFFECT_TYPES = {
    SetFieldText: "set_field_text",
    SetFieldInvalid: "set_field_invalid",
    SetStatus: "set_status",
    SetByteCount: "set_byte_count",
    SetCharCount: "set_char_count",
}


def effect_to_json(effect) -> dict:
    payload = {"type": _EFFECT_TYPES[type(effect)]}
    if isinstance(effect, SetFieldText):
        payload.update(field=effect.field.value, text=effect.text)
    elif isinstance(effect, SetFieldInvalid):
        payload.update(field=effect.field.value, invalid=effect.invalid)
    elif isinstance(effect, SetStatus):
        payload.update(message=effect.message, severity=effect.severity.value or "none")
    else:
        payload["count"] = effect.count
    return payload


def state_to_json(state: UIState) -> dict:
    return {
        "fields": {field.value: text for field, text in state.texts.items()},
        "invalid": sorted(field.value for field in state.invalid),
        "status": {
            "message": state.status.message,
            "severity": state.status.severity.value or "none",
        },
        "byte_count": byte_count_label(state.byte_count),
        "char_count": char_count_label(state.char_count),
    }


def _posted_state() -> UIState:
    # Browsers submit textarea line breaks as CRLF but expose them as LF.
    return UIState.from_texts(
        {field.value: request.form.get(field.value, "").replace("\r\n", "\n") for field in FIELD_SPECS}
    )


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        abort(400, description="Request body must be a JSON object.")
    return body


def _json_state(body: dict) -> UIState:
    fields = body.get("fields") or {}
    if not isinstance(fields, dict) or not all(v is None or isinstance(v, str) for v in fields.values()):
        abort(400, description="'fields' must map field names to strings or null.")
    try:
        return UIState.from_texts(fields)
    except ValueError as e:
        abort(400, description=str(e))


def _displayable(text: str) -> str:
    # Lone surrogates from values in U+D800..U+DFFF cannot be sent as UTF-8.
    return text.encode("utf-8", "replace").decode("utf-8")


def _render(state: UIState, error=None, clipboard=None):
    return render_template_string(
        HTML_TEMPLATE,
        specs=list(FIELD_SPECS.values()),
        state=state,
        texts={field: _displayable(text) for field, text in state.texts.items()},
        error=error,
        clipboard=clipboard,
        byte_count=byte_count_label(state.byte_count),
        char_count=char_count_label(state.char_count),
    )


def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env(ENV_PREFIX)
    if config:
        app.config.update(config)
    level = app.config["LOG_LEVEL"]
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=app.config["LOG_FORMAT"])

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if request.path.startswith("/api/"):
            return jsonify(error=e.description), e.code
        return e

    @app.route("/", methods=["GET", "POST"])
    def index():
        if request.method == "GET":
            converter = Converter()
            converter.load_sample()
            flash("Loaded sample input", "success")
            return _render(converter.state)

        action = request.form.get("action", "")
        previous = _posted_state()
        source = None
        if action.startswith(("convert:", "copy:")):
            try:
                source = field_from_key(action.split(":", 1)[1])
            except ValueError as e:
                abort(400, description=str(e))
        elif action not in ("clear", "sample", "copy-all"):
            abort(400, description=f"Unknown action: {action!r}")

        try:
            if action == "copy-all":
                payload = copy_all_payload(field_snapshot(previous))
                if payload is None:
                    flash("Nothing to copy", "error")
                    return _render(previous)
                flash("Copied all fields", "success")
                return _render(previous, clipboard=payload)
            if action.startswith("copy:"):
                payload = copy_field_payload(field_snapshot(previous), source)
                if payload is None:
                    flash("Nothing to copy", "error")
                    return _render(previous)
                flash(f"{FIELD_SPECS[source].label} copied", "success")
                return _render(previous, clipboard=payload)
            if action == "clear":
                state = clear_transition(previous).state
                flash("Converter cleared", "info")
            elif action == "sample":
                converter = Converter(state=previous)
                converter.load_sample()
                state = converter.state
                flash("Loaded sample input", "success")
            else:
                state = transition(source, previous.text_of(source), previous).state
            return _render(state)
        except Exception as e:
            logging.error(f"An unhandled exception occurred: {e}", exc_info=True)
            return _render(previous, error="A critical server error occurred. Please try again.")

    @app.route("/api/convert", methods=["POST"])
    def api_convert():
        body = _json_body()
        raw = body.get("raw", "")
        if not isinstance(raw, str):
            abort(400, description="'raw' must be a string.")
        try:
            field = field_from_key(body.get("field", ""))
        except ValueError as e:
            abort(400, description=str(e))
        result = transition(field, raw, _json_state(body))
        response = state_to_json(result.state)
        response["source"] = field.value
        response["error"] = result.outcome.error.message if result.failed else None
        response["effects"] = [effect_to_json(effect) for effect in result.effects]
        return jsonify(response)

    @app.route("/api/clear", methods=["POST"])
    def api_clear():
        result = clear_transition(_json_state(_json_body()))
        response = state_to_json(result.state)
        response["effects"] = [effect_to_json(effect) for effect in result.effects]
        return jsonify(response)

    @app.route("/api/sample", methods=["GET"])
    def api_sample():
        converter = Converter()
        result = converter.load_sample()
        response = state_to_json(converter.state)
        response["effects"] = [effect_to_json(effect) for effect in result.effects]
        return jsonify(response)

    @app.route("/api/snapshot", methods=["POST"])
    def api_snapshot():
        snapshot = field_snapshot(_json_state(_json_body()))
        return jsonify(snapshot=snapshot, payload=copy_all_payload(snapshot))

    return app


def main():
    app = create_app()
    app.run(debug=app.config["DEBUG"], host=app.config["HOST"], port=app.config["PORT"])


if __name__ == "__main__":
    main()
