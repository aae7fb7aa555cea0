from sqlalchemy import inspect

from weighin import db


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_cors_headers(client):
    res = client.get('/getleaderboard', headers={'Origin': 'http://game.example'})
    # Older Flask-Cors answers '*', newer releases echo the request origin
    assert res.headers.get('Access-Control-Allow-Origin') in ('*', 'http://game.example')


def test_services_are_registered(flask_app):
    services = flask_app.extensions['weighin']
    assert set(services) == {'leaderboard', 'weight', 'images'}


def test_db_reset_command(flask_app):
    db.drop_all()
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['db-reset'])
    assert result.exit_code == 0
    assert 'Database has been reset' in result.output
    assert 'leaderboard' in inspect(db.engine).get_table_names()
