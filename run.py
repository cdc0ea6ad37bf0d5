# run.py
import logging

import click
from flask.cli import with_appcontext

from petstore import create_app, db
from petstore.seed import seed_data as load_seed_data

app = create_app()
logger = logging.getLogger(__name__)


@app.cli.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    click.echo('Database initialized.')


@app.cli.command('seed-data')
@with_appcontext
def seed_data():
    db.create_all()
    load_seed_data()
    click.echo('Seed data loaded.')


if __name__ == '__main__':
    logger.info('Starting development server')
    app.run(debug=True, host='0.0.0.0', port=5000)
