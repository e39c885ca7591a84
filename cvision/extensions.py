from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from sqlalchemy import MetaData

# stable constraint names so Flask-Migrate can alter uq_/ck_/fk_ constraints later
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

cors = CORS()

db = SQLAlchemy(metadata=MetaData(naming_convention=NAMING_CONVENTION))
migrate = Migrate()
jwt = JWTManager()
bcrypt = Bcrypt()


# JWT failures use the same {"error": ...} body as every other API error
def _unauthorized(message):
    return jsonify({"error": message}), 401


@jwt.unauthorized_loader
def _missing_token(reason):
    return _unauthorized("Unauthorized")


@jwt.invalid_token_loader
def _invalid_token(reason):
    return _unauthorized("Invalid token")


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return _unauthorized("Token has expired")
