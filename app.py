# Swish Drip - development server / WSGI entry point
# Run locally with `python app.py` or serve `app:app` with any WSGI server

from swishdrip import create_app
from swishdrip.extensions import db

app = create_app()


@app.cli.command('init-db')
def init_db():
    """Create all tables without migrations."""
    db.create_all()
    print('Database tables created.')


if __name__ == '__main__':
    with app.app_context():
        db.create_all()
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000)
