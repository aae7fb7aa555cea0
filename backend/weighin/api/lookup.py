from flask import Blueprint, jsonify, request, current_app


lookup = Blueprint('lookup', __name__)


def _object_name():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data.get('object')


@lookup.route('/get-weight', methods=['POST'])
def get_weight():
    service = current_app.extensions['weighin']['weight']
    weight = service.infer_weight_kilograms(_object_name())
    return jsonify({'weight': weight})


@lookup.route('/generate-image', methods=['POST'])
def generate_image():
    service = current_app.extensions['weighin']['images']
    image_url = service.find_image_url(_object_name())
    return jsonify({'imageUrl': image_url})
