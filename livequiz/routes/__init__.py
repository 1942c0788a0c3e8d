from flask import jsonify

from livequiz.errors import QuizError
from .quiz_routes import quiz_bp
from .legacy_routes import legacy_bp


def register_routes(app):
    app.register_blueprint(quiz_bp)
    app.register_blueprint(legacy_bp)

    @app.errorhandler(QuizError)
    def handle_quiz_error(e):
        return jsonify(e.to_dict()), e.status_code
