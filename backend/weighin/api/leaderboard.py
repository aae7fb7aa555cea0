from flask import Blueprint, jsonify, request, current_app


leaderboard = Blueprint('leaderboard', __name__)

_MESSAGES = {
    'created': 'Score added successfully',
    'updated': 'Score updated successfully',
    'unchanged': 'Score unchanged; existing best is higher or equal',
}


def _service():
    return current_app.extensions['weighin']['leaderboard']


@leaderboard.route('/getleaderboard', methods=['GET'])
def get_leaderboard():
    records = _service().get_top()
    return jsonify([r.to_dict() for r in records])


@leaderboard.route('/leaderboard', methods=['POST'])
def submit_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    result = _service().submit_score(data.get('name'), data.get('score'))
    status = 201 if result.created else 200
    return jsonify({'message': _MESSAGES[result.outcome], 'score': result.score}), status
