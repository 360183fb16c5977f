#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -e ".[test]"
#setup: flask --app backend.wsgi run --port 5000 --debug

from __future__ import annotations

import logging

from backend.app import create_app

app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=app.config["LOG_LEVEL"], format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(port=3000, debug=True)
