"""Blueprint registration.

All routes keep the URL paths and response shapes used by the front page.
"""

from __future__ import annotations


def register_blueprints(app):
    # Import locally to avoid import-time side effects / circular imports.
    from .home import bp as home_bp
    from .files import bp as files_bp
    from .exchanges import bp as exchanges_bp
    from .system import bp as system_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(files_bp)
    app.register_blueprint(exchanges_bp)
    app.register_blueprint(system_bp)
