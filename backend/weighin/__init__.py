from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    # Game clients are served from arbitrary origins
    CORS(flask_app)

    # Services own their collaborators; routes look them up per request
    from weighin.providers import CompletionClient, ImageSearchClient
    from weighin.services import ImageService, LeaderboardService, WeightService
    cfg = flask_app.config
    flask_app.extensions['weighin'] = {
        'leaderboard': LeaderboardService(db, limit=int(cfg.get('LEADERBOARD_LIMIT', 10))),
        'weight': WeightService(CompletionClient.from_config(cfg)),
        'images': ImageService(
            ImageSearchClient.from_config(cfg),
            per_page=int(cfg.get('PIXABAY_PER_PAGE', 5)),
        ),
    }

    from weighin.errors import ServiceError

    @flask_app.errorhandler(ServiceError)
    def handle_service_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    # Import and register blueprints here
    from weighin.main import main
    flask_app.register_blueprint(main)

    # Some clients call the routes bare, others under /api
    from weighin.api.leaderboard import leaderboard
    from weighin.api.lookup import lookup
    for bp in (leaderboard, lookup):
        flask_app.register_blueprint(bp)
        flask_app.register_blueprint(bp, url_prefix='/api', name=f'api_{bp.name}')

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the leaderboard table."""
        import weighin.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
