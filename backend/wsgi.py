import os

from portfolio import create_app

app = create_app(os.getenv("FLASK_CONFIG", "development"))
