import logging

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from config import Config
from extensions import db
from livequiz.routes import register_routes
from livequiz.services.question_service import QuestionBank
from livequiz.services.quiz_service import ensure_schema

logger = logging.getLogger(__name__)


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))


def create_app(config_class=Config, question_bank=None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    db.init_app(app)

    if question_bank is None:
        try:
            question_bank = QuestionBank.from_file(app.config["QUESTIONS_PATH"])
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load question bank from {app.config['QUESTIONS_PATH']}: {e}")
            raise
    app.extensions["question_bank"] = question_bank

    register_routes(app)

    with app.app_context():
        try:
            ensure_schema()
        except SQLAlchemyError as e:
            # retried before every write
            db.session.rollback()
            logger.warning(f"Database not ready at start-up: {e}")

    logger.info(f"Quiz server ready with rounds {question_bank.rounds}")
    return app


if __name__ == "__main__":
    app = create_app()
    print(f"LIVE QUIZ READY ON {Config.HOST}:{Config.PORT}")
    app.run(host=Config.HOST, port=Config.PORT)
