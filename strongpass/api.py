import logging

from flask import Flask, jsonify, request

from strongpass.config import PasswordConfig
from strongpass.evaluator import evaluate_password
from strongpass.exc import ConfigError

logger = logging.getLogger(__name__)

app = Flask(__name__)


@app.route('/')
def home():
    return jsonify({
        "message": "StrongPass API is running"
    })


@app.route('/evaluate', methods=['POST'])
def evaluate_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    password = data.get('password')
    if not isinstance(password, str):
        return jsonify({'error': "'password' must be a string"}), 400
    try:
        config = PasswordConfig.from_dict(data.get('config'))
    except ConfigError as e:
        logger.info("rejected evaluation request: %s", e)
        return jsonify({'error': str(e)}), 400
    report = evaluate_password(password, config)
    return jsonify(report.as_dict())


if __name__ == "__main__":
    app.run(debug=True)
