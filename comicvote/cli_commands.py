import os
import re
import shutil
from datetime import date

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db
from .models.vote import Vote, getVote

SEED_VOTES = [
    ('001', 'visitor-aaa'),
    ('001', 'visitor-bbb'),
    ('002', 'visitor-aaa'),
]

# page-1.png, p1.png, 1.png
PAGE_PATTERN = r'^(page-)?p?{n}\.png$'
COMIC_ID_PATTERN = re.compile(r'^[A-Za-z0-9][A-Za-z0-9_-]*$')


@click.command('seed-votes')
@with_appcontext
def seed_votes():
    """Insert the demo votes"""
    added = 0
    for comic_id, visitor_id in SEED_VOTES:
        if getVote(comic_id, visitor_id):
            continue
        db.session.add(Vote(comic_id=comic_id, visitor_id=visitor_id))
        added += 1
    db.session.commit()
    click.echo(f'Seeded {added} vote(s).')


@click.command('clear-votes')
@click.option('--comic', 'comic_id', default=None, help='Only delete votes for this comic.')
@with_appcontext
def clear_votes(comic_id):
    """Delete all votes, or the votes of one comic"""
    try:
        query = Vote.query
        if comic_id:
            query = query.filter_by(comic_id=comic_id)
        deleted_count = query.delete()
        db.session.commit()
        click.echo(f'Deleted {deleted_count} vote(s).')
    except SQLAlchemyError as e:
        db.session.rollback()
        raise click.ClickException(f'Could not delete votes: {e}')


def title_case(slug):
    """'le-chat-noir' -> 'Le chat noir'"""
    words = slug.split('-')
    return ' '.join(w[:1].upper() + w[1:] if i == 0 else w for i, w in enumerate(words))


def find_source_folder(export_dir, comic_id):
    """Locate <export>/<id>-<slug>/ and its two page images."""
    try:
        entries = sorted(os.listdir(export_dir))
    except FileNotFoundError:
        raise click.ClickException(f'Export folder not found: {export_dir}')

    folder = next((e for e in entries if e.startswith(f'{comic_id}-')), None)
    if not folder:
        found = ', '.join(e for e in entries if e.startswith(comic_id)) or '(none)'
        raise click.ClickException(f'No folder matching {comic_id}-* in {export_dir}. Found: {found}')

    slug = folder[len(comic_id) + 1:]
    folder_path = os.path.join(export_dir, folder)
    files = sorted(os.listdir(folder_path))

    pages = []
    for n in (1, 2):
        pattern = re.compile(PAGE_PATTERN.format(n=n))
        page = next((f for f in files if pattern.match(f)), None)
        if not page:
            raise click.ClickException(
                f'Could not find page 1 & 2 images in {folder_path}. Found: {", ".join(files)}'
            )
        pages.append(os.path.join(folder_path, page))

    return pages[0], pages[1], slug


def build_frontmatter(comic_id, title, alt, prefix, today=None):
    today = today or date.today()
    base = f'../../assets/comics/{comic_id}/{prefix}-{comic_id}'
    title = title.replace('"', '\\"')
    alt = alt.replace('"', '\\"')
    return (
        '---\n'
        f'title: "{title}"\n'
        f'date: {today.isoformat()}\n'
        f'cover: {base}-cover.png\n'
        'pages:\n'
        f'  - {base}-p1.png\n'
        f'  - {base}-p2.png\n'
        f'alt: "{alt}"\n'
        '---\n'
    )


def validate_comic_id(ctx, param, value):
    """Ids become file and folder names, so no separators or dots."""
    if not COMIC_ID_PATTERN.match(value):
        raise click.BadParameter(f'{value!r} may only contain letters, digits, "-" and "_"')
    return value


@click.command('new-comic')
@click.argument('comic_id', callback=validate_comic_id)
@click.option('--title', default=None, help='Comic title (defaults to the folder slug).')
@click.option('--alt-ending', default=None, help='End of the alt text sentence.')
@with_appcontext
def new_comic(comic_id, title, alt_ending):
    """Copy a comic's exported pages and write its content file"""
    config = current_app.config
    prefix = config['COMIC_IMAGE_PREFIX']
    alt_prefix = config['COMIC_ALT_PREFIX']

    click.echo(f'Creating new comic: {comic_id}')
    src1, src2, slug = find_source_folder(config['COMICS_EXPORT_DIR'], comic_id)
    click.echo(f'  Found: {src1}')
    click.echo(f'  Found: {src2}')

    guessed_title = title_case(slug)
    if title is None:
        title = click.prompt('  Title', default=guessed_title)
    if not title.strip():
        raise click.ClickException('Title cannot be empty')
    if alt_ending is None:
        click.echo(f'  {alt_prefix}...')
        alt_ending = click.prompt("  Finish the sentence: '", default='', show_default=False)

    asset_dir = os.path.join(config['COMICS_ASSETS_DIR'], comic_id)
    os.makedirs(asset_dir, exist_ok=True)
    click.echo(f'  Created: {asset_dir}')

    for src, page in ((src1, 'p1'), (src2, 'p2')):
        name = f'{prefix}-{comic_id}-{page}.png'
        shutil.copyfile(src, os.path.join(asset_dir, name))
        click.echo(f'  Copied:  {name}')

    content_dir = config['COMICS_CONTENT_DIR']
    os.makedirs(content_dir, exist_ok=True)
    md_path = os.path.join(content_dir, f'{comic_id}.md')
    with open(md_path, 'w', encoding='utf-8') as f:
        f.write(build_frontmatter(comic_id, title.strip(), f'{alt_prefix}{alt_ending}', prefix))
    click.echo(f'  Created: {md_path}')

    click.echo(f'Comic {comic_id} is ready!')


def register_commands(app):
    app.cli.add_command(seed_votes)
    app.cli.add_command(clear_votes)
    app.cli.add_command(new_comic)
