######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################

"""
Admin Console Service

This service exposes the console state over a REST API: sign in and out,
switch views, edit and delete users, and process payment requests.
"""

# Standard library
from concurrent.futures import CancelledError, TimeoutError as ReadTimeoutError
from functools import wraps

# Third-party
from flask import abort, current_app as app, jsonify, request

# First-party
from console.common import status  # HTTP status codes
from console.coordinator import coordinator
from console.editor import command_from_dict
from console.registry import DELETE_CONFIRMATION


def _parse_bool_strict(value: str):
    """
    Strictly parse query-string boolean.
    Accepted (case-insensitive, trimmed):
      True:  'true', '1', 'yes'
      False: 'false', '0', 'no'
    Others: return None (caller should raise 400)
    """
    v = str(value).strip().lower()
    if v in {"true", "1", "yes"}:
        return True
    if v in {"false", "0", "no"}:
        return False
    return None


def login_required(func):
    """Answers 401 while the console is signed out"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if not coordinator.session.is_authenticated:
            abort(status.HTTP_401_UNAUTHORIZED, "Sign in to use the console.")
        return func(*args, **kwargs)

    return wrapper


def _editor_state() -> dict:
    draft = coordinator.editing_user
    return {
        "open": coordinator.user_editor_open,
        "mode": coordinator.editor_mode,
        "user": draft.serialize() if draft else None,
    }


def _processor_state() -> dict:
    payment = coordinator.processing_payment
    return {
        "open": payment is not None,
        "payment": payment.serialize() if payment else None,
        "stagedReceipt": coordinator.staged_receipt,
    }


######################################################################
# Root endpoint
######################################################################
@app.route("/", methods=["GET"])
def index():
    """Root URL response"""
    return (
        jsonify(
            name="Admin Console Service",
            version="1.0.0",
            description="In-memory console for users, promo codes and payment approvals",
            paths={
                "session": "/session",
                "view": "/view",
                "dashboard": "/dashboard",
                "users": "/users",
                "editor": "/editor",
                "payments": "/payments",
                "processor": "/processor",
            },
        ),
        status.HTTP_200_OK,
    )


######################################################################
# SESSION
######################################################################
@app.route("/session", methods=["GET"])
def get_session():
    """Reports whether the console is signed in"""
    return jsonify(authenticated=coordinator.session.is_authenticated), status.HTTP_200_OK


@app.route("/session", methods=["POST"])
def login():
    """
    Sign in
    Any submitted values are accepted; only the email is logged
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    coordinator.login(data.get("email") or data.get("username"))
    return jsonify(authenticated=True), status.HTTP_200_OK


@app.route("/session", methods=["DELETE"])
def logout():
    """Sign out without discarding any users or payments"""
    coordinator.logout()
    return "", status.HTTP_204_NO_CONTENT


######################################################################
# VIEW and DASHBOARD
######################################################################
@app.route("/view", methods=["GET"])
@login_required
def get_view():
    """Returns the active view"""
    return jsonify(view=coordinator.current_view.value), status.HTTP_200_OK


@app.route("/view", methods=["PUT"])
@login_required
def change_view():
    """Switches to dashboard, users or payments"""
    check_content_type("application/json")
    data = request.get_json()
    if not isinstance(data, dict) or "view" not in data:
        abort(status.HTTP_400_BAD_REQUEST, "Field 'view' is required")
    view = coordinator.navigate(data["view"])
    return jsonify(view=view.value), status.HTTP_200_OK


@app.route("/dashboard", methods=["GET"])
@login_required
def dashboard():
    """Returns the dashboard statistics computed from the current state"""
    app.logger.info("Request for dashboard statistics")
    stats = coordinator.dashboard_stats()
    return jsonify(stats.serialize()), status.HTTP_200_OK


######################################################################
# USERS
######################################################################
@app.route("/users", methods=["GET"])
@login_required
def list_users():
    """
    List Users
    - Without query: return all users in insertion order
    - With ?q=<term>: users whose name or email contains the term
    """
    app.logger.info("Request to list Users")
    term = request.args.get("q")
    users = coordinator.list_users(search=term)
    return jsonify([u.serialize() for u in users]), status.HTTP_200_OK


@app.route("/users/<user_id>", methods=["GET"])
@login_required
def get_user(user_id: str):
    """Get a User by id"""
    app.logger.info("Request to get User with id [%s]", user_id)
    user = coordinator.find_user(user_id)
    if not user:
        abort(status.HTTP_404_NOT_FOUND, f"User with id '{user_id}' was not found.")
    return jsonify(user.serialize()), status.HTTP_200_OK


@app.route("/users/<user_id>", methods=["DELETE"])
@login_required
def delete_user(user_id: str):
    """
    Delete a User by id
    - ?confirm=true deletes (204, also when the user does not exist)
    - omitted or ?confirm=false is a declined confirmation (200, nothing deleted)
    """
    app.logger.info("Request to delete User with id [%s]", user_id)
    confirm_raw = request.args.get("confirm", "false")
    confirmed = _parse_bool_strict(confirm_raw)
    if confirmed is None:
        abort(
            status.HTTP_400_BAD_REQUEST,
            (
                "Invalid value for query parameter 'confirm'. "
                "Accepted: true, false, 1, 0, yes, no (case-insensitive). "
                f"Received: {confirm_raw!r}"
            ),
        )
    if not coordinator.delete_user(user_id, lambda message: confirmed):
        return jsonify(deleted=False, message=DELETE_CONFIRMATION), status.HTTP_200_OK
    return "", status.HTTP_204_NO_CONTENT


######################################################################
# USER EDITOR
######################################################################
@app.route("/editor", methods=["GET"])
@login_required
def get_editor():
    """Returns the editor state and its draft"""
    return jsonify(_editor_state()), status.HTTP_200_OK


@app.route("/editor", methods=["POST"])
@login_required
def open_editor():
    """
    Open the user editor
    - {} opens an empty editor for a new user
    - {"userId": "<id>"} opens the editor on a copy of that user
    """
    check_content_type("application/json")
    data = request.get_json() or {}
    if not isinstance(data, dict):
        abort(status.HTTP_400_BAD_REQUEST, "Body must be an object")
    user_id = data.get("userId")
    app.logger.info("Request to open the user editor for [%s]", user_id or "new user")
    if coordinator.open_user_editor(user_id) is None:
        abort(status.HTTP_404_NOT_FOUND, f"User with id '{user_id}' was not found.")
    return jsonify(_editor_state()), status.HTTP_200_OK


@app.route("/editor", methods=["PATCH"])
@login_required
def update_editor():
    """
    Apply field updates to the draft
    Body: a list of updates, {"updates": [...]}, or a single update
    """
    check_content_type("application/json")
    data = request.get_json()
    if isinstance(data, dict) and "updates" in data:
        data = data["updates"]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        abort(status.HTTP_400_BAD_REQUEST, "Body must be a list of updates")
    app.logger.info("Processing %d editor updates", len(data))
    commands = [command_from_dict(item) for item in data]
    coordinator.apply_editor_update(*commands)
    return jsonify(_editor_state()), status.HTTP_200_OK


@app.route("/editor/save", methods=["POST"])
@login_required
def save_editor():
    """Validate the draft, store it and close the editor"""
    app.logger.info("Request to save the user editor")
    user = coordinator.save_user_editor()
    return jsonify(user.serialize()), status.HTTP_200_OK


@app.route("/editor", methods=["DELETE"])
@login_required
def close_editor():
    """Close the editor and discard the draft"""
    coordinator.close_user_editor()
    return "", status.HTTP_204_NO_CONTENT


######################################################################
# PAYMENTS
######################################################################
@app.route("/payments", methods=["GET"])
@login_required
def list_payments():
    """
    List Payment Requests
    - ?status=<PENDING|PAID|APPROVED|REJECTED> limits the list to one status
    """
    app.logger.info("Request to list Payments")
    payments = coordinator.list_payments(request.args.get("status") or None)
    return jsonify([p.serialize() for p in payments]), status.HTTP_200_OK


@app.route("/payments/<payment_id>", methods=["GET"])
@login_required
def get_payment(payment_id: str):
    """Get a Payment Request by id"""
    app.logger.info("Request to get Payment with id [%s]", payment_id)
    payment = coordinator.find_payment(payment_id)
    if not payment:
        abort(status.HTTP_404_NOT_FOUND, f"Payment with id '{payment_id}' was not found.")
    return jsonify(payment.serialize()), status.HTTP_200_OK


@app.route("/payments/<payment_id>/status", methods=["PUT"])
@login_required
def update_payment_status(payment_id: str):
    """
    Set the status of a Payment Request
    Body: {"status": "...", "receiptImage": "<data url>"}; receiptImage is optional
    """
    app.logger.info("Request to update status of Payment [%s]", payment_id)
    check_content_type("application/json")
    data = request.get_json()
    if not isinstance(data, dict) or "status" not in data:
        abort(status.HTTP_400_BAD_REQUEST, "Field 'status' is required")
    if not coordinator.find_payment(payment_id):
        abort(status.HTTP_404_NOT_FOUND, f"Payment with id '{payment_id}' was not found.")
    payment = coordinator.update_payment_status(
        payment_id, data["status"], data.get("receiptImage")
    )
    return jsonify(payment.serialize()), status.HTTP_200_OK


######################################################################
# PAYMENT PROCESSOR
######################################################################
@app.route("/processor", methods=["GET"])
@login_required
def get_processor():
    """Returns the processor state and the staged receipt"""
    return jsonify(_processor_state()), status.HTTP_200_OK


@app.route("/processor", methods=["POST"])
@login_required
def open_processor():
    """Open the payment processor. Body: {"paymentId": "<id>"}"""
    check_content_type("application/json")
    data = request.get_json()
    if not isinstance(data, dict) or not data.get("paymentId"):
        abort(status.HTTP_400_BAD_REQUEST, "Field 'paymentId' is required")
    payment_id = data["paymentId"]
    app.logger.info("Request to process Payment [%s]", payment_id)
    if coordinator.open_payment_processor(payment_id) is None:
        abort(status.HTTP_404_NOT_FOUND, f"Payment with id '{payment_id}' was not found.")
    return jsonify(_processor_state()), status.HTTP_200_OK


@app.route("/processor/receipt", methods=["POST"])
@login_required
def attach_receipt():
    """Attach a receipt image (multipart field 'file') to the open payment"""
    upload = request.files.get("file")
    if upload is None:
        abort(status.HTTP_400_BAD_REQUEST, "A receipt file is required in field 'file'")
    app.logger.info("Request to attach receipt %s", upload.filename)
    future = coordinator.attach_receipt(upload.read(), upload.mimetype)
    try:
        future.result(timeout=app.config.get("RECEIPT_READ_TIMEOUT", 10))
    except CancelledError:
        abort(status.HTTP_409_CONFLICT, "The receipt was replaced before it finished reading.")
    except ReadTimeoutError:
        future.cancel()
        app.logger.error("Receipt %s was not read in time", upload.filename)
        abort(status.HTTP_500_INTERNAL_SERVER_ERROR, "The receipt could not be read in time.")
    return jsonify(_processor_state()), status.HTTP_200_OK


@app.route("/processor/receipt", methods=["DELETE"])
@login_required
def clear_receipt():
    """Clear the receipt; the decision removes the one stored on the payment"""
    coordinator.clear_receipt()
    return jsonify(_processor_state()), status.HTTP_200_OK


@app.route("/processor/decision", methods=["POST"])
@login_required
def decide_payment():
    """Apply a status to the open payment and close the processor. Body: {"status": "..."}"""
    check_content_type("application/json")
    data = request.get_json()
    if not isinstance(data, dict) or "status" not in data:
        abort(status.HTTP_400_BAD_REQUEST, "Field 'status' is required")
    app.logger.info("Request to mark processed payment as %s", data["status"])
    payment = coordinator.decide_payment(data["status"])
    return jsonify(payment.serialize()), status.HTTP_200_OK


@app.route("/processor", methods=["DELETE"])
@login_required
def close_processor():
    """Close the processor and drop anything staged"""
    coordinator.close_payment_processor()
    return "", status.HTTP_204_NO_CONTENT


######################################################################
# Utility: Content-Type guard
######################################################################
def check_content_type(content_type: str):
    """Checks that the media type is correct (tolerates charset etc.)"""
    # Werkzeug exposes parsed mimetype; if header missing, this is None
    if request.mimetype != content_type:
        got = request.content_type or "none"
        abort(
            status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            f"Content-Type must be {content_type}; received {got}",
        )


######################################################################
# Endpoint: /health (K8s liveness/readiness)
######################################################################
@app.route("/health", methods=["GET"])
def health():
    """
    K8s health check endpoint
    Returns:
        JSON: {"status": "OK"} with HTTP 200
    """
    app.logger.info("Health check requested")
    return jsonify(status="OK"), status.HTTP_200_OK
