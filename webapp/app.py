"""
Flask web application demonstrating sqlresult.

Exposes a single endpoint that executes one SQL statement and returns its
rendered outcome:
- Queries come back as bracketed header and row lines
- Other statements come back as an affected-row count
"""

from flask import Flask, request, jsonify

from sqlresult.config import configure_logging, load_settings
from sqlresult.executor.sql_executor import SqlExecutor
from sqlresult.utils.exceptions import SqlResultError


def create_app(executor: SqlExecutor = None) -> Flask:
    """
    Build the app around an executor.

    Args:
        executor: Executor to run statements on; one is opened from the
            environment settings when omitted
    """
    app = Flask(__name__)

    if executor is None:
        settings = load_settings()
        configure_logging(settings.log_level)
        executor = SqlExecutor.from_settings(settings)
    app.config['EXECUTOR'] = executor

    @app.route('/api/health', methods=['GET'])
    def health():
        """Liveness check."""
        return jsonify({'status': 'ok'})

    @app.route('/api/execute', methods=['POST'])
    def execute():
        """Execute one statement and return its rendered outcome."""
        data = request.get_json(silent=True) or {}
        sql = data.get('sql')
        if not isinstance(sql, str):
            return jsonify({'error': "Field 'sql' is required"}), 400

        try:
            with app.config['EXECUTOR'].execute(sql) as result:
                text = result.render()
                if text is None:
                    return jsonify({'error': str(result.last_error)}), 400

                return jsonify({
                    'is_query': result.is_query,
                    'text': text,
                    'rows_affected': None if result.is_query else result.rows_affected,
                })
        except SqlResultError as e:
            return jsonify({'error': str(e)}), 400

    return app


if __name__ == '__main__':
    app = create_app()
    print("\n" + "="*60)
    print("sqlresult demo running!")
    print("POST {\"sql\": \"...\"} to http://localhost:5000/api/execute")
    print("="*60 + "\n")
    # one connection, used from one thread
    app.run(debug=True, port=5000, threaded=False)
