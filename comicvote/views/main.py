import os

from flask import Blueprint, current_app, jsonify, render_template

main_bp = Blueprint('main', __name__)


def list_comic_ids():
    """Comic ids are the stems of the content files (001.md -> 001), newest first."""
    content_dir = current_app.config['COMICS_CONTENT_DIR']
    if not os.path.isdir(content_dir):
        return []
    ids = [f[:-3] for f in os.listdir(content_dir) if f.endswith('.md')]
    return sorted(ids, reverse=True)


@main_bp.route('/')
def index():
    return render_template('comics.html', comic_ids=list_comic_ids())


@main_bp.route('/health')
def health():
    return jsonify({'status': 'ok'})
