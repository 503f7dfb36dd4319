"""Blueprint registration for Flask app"""


def register_blueprints(app):
    """Register all blueprints with the Flask app"""
    from domains.companions import companions_bp, sessions_bp

    app.register_blueprint(companions_bp, url_prefix='/api/companions')
    app.register_blueprint(sessions_bp, url_prefix='/api/sessions')
