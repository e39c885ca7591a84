from flask import Blueprint, request, jsonify
from cvision.services.auth import AuthService
from cvision.services.errors import InvalidPayload

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _json_body():
    data = request.get_json(silent=True)
    if not data:
        raise InvalidPayload("No JSON data provided")
    return data


@auth_bp.route("/register", methods=["POST"])
def register():
    data = _json_body()

    name = data.get("name")
    email = data.get("email")
    password = data.get("password")
    selected_role = data.get("role")

    if not name or not email or not password or not selected_role:
        raise InvalidPayload("Name, email, password and role are required")

    token = AuthService.register(name, email, password, selected_role)
    return jsonify({"access_token": token}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = _json_body()

    email = data.get("email")
    password = data.get("password")
    selected_role = data.get("role")

    if not email or not password or not selected_role:
        raise InvalidPayload("Email, password and role are required")

    token = AuthService.authenticate_user(email, password, selected_role)
    return jsonify({"access_token": token}), 200
