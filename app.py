from flask import Flask, request

from serving.chain import build_chain
from serving.config import ServerConfig


def create_app(config: ServerConfig) -> Flask:
    # No built-in /static route: every path belongs to the served directory.
    app = Flask(__name__, static_folder=None)
    app.config['SERVER_CONFIG'] = config
    chain = build_chain(config)

    @app.route('/', defaults={'path': ''}, methods=['GET', 'HEAD'])
    @app.route('/<path:path>', methods=['GET', 'HEAD'])
    def serve_path(path):
        return chain.handle(request)

    return app
