from flask import current_app

EXTENSION_KEY = "pixcheck"


def init_app(app, config, session):
    app.extensions[EXTENSION_KEY] = {"config": config, "session": session}


def get_config():
    return current_app.extensions[EXTENSION_KEY]["config"]


def get_session():
    return current_app.extensions[EXTENSION_KEY]["session"]
