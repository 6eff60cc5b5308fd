"""
File manager routes for listing, viewing, editing, deleting and restoring files.
"""
from flask import (
    Blueprint, request, jsonify, current_app, flash, redirect, url_for,
    session, get_flashed_messages
)
from markupsafe import escape

from file_manager.database import get_db
from file_manager.models import Visibility
from file_manager.services.file_loader import get_file_loader
from file_manager.services.file_editor import get_file_editor
from file_manager.services.translator import get_translator
from file_manager.utils.formatters import (
    format_file_size, format_duration, format_dimensions, format_timestamp
)
from file_manager.utils.validators import (
    parse_tags, validate_alt_text, parse_optional_int, ValidationError
)

bp = Blueprint('file_manager', __name__, url_prefix='/files')


def _current_user_id():
    """Id of the acting user."""
    return session.get('user_id', current_app.config.get('DEFAULT_USER_ID'))


def _display_name(file) -> str:
    return file.file.basename if file.file is not None else file.name


# ============================================================================
# READ ROUTES
# ============================================================================

@bp.route('', methods=['GET'])
def listing():
    """
    List live files.

    Query parameters:
        - search: Words that sound like the file name or a tag
        - type_id: Only files of this type
        - user_id: Only files created by this user

    Returns:
        {
            "files": [{...}],
            "total": 12,
            "messages": [["success", "logo.png was deleted. ..."]]
        }
    """
    try:
        search = request.args.get('search', '').strip()
        type_id = parse_optional_int(request.args.get('type_id'), 'type_id')
        user_id = parse_optional_int(request.args.get('user_id'), 'user_id')

        loader = get_file_loader(current_app, get_db())
        if search:
            files = loader.get_by_search_term(search)
        elif type_id is not None:
            files = loader.get_by_type(type_id)
        elif user_id is not None:
            files = loader.get_by_user(user_id)
        else:
            files = loader.get_all()

        # Narrow by the remaining filters
        if type_id is not None:
            files = [f for f in files if f.type_id == type_id]
        if user_id is not None:
            files = [f for f in files if f.authorship.created_by == user_id]

        return jsonify({
            'files': [f.to_dict() for f in files],
            'total': len(files),
            'messages': get_flashed_messages(with_categories=True)
        }), 200

    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"List files error: {e}", exc_info=True)
        return jsonify({'error': 'Failed to list files'}), 500


@bp.route('/<int:file_id>', methods=['GET'])
def detail(file_id):
    """Get one file with display helpers."""
    try:
        loader = get_file_loader(current_app, get_db())
        file = loader.get_by_id(file_id)

        if not file:
            return jsonify({'error': 'File not found'}), 404

        return jsonify({
            'file': file.to_dict(),
            'author': file.authorship.created_by,
            'display': {
                'size': format_file_size(file.file_size),
                'dimensions': format_dimensions(file.dimension_x, file.dimension_y),
                'duration': format_duration(file.duration),
                'created_at': format_timestamp(file.authorship.created_at),
                'updated_at': format_timestamp(file.authorship.updated_at),
            },
            'messages': get_flashed_messages(with_categories=True)
        }), 200

    except Exception as e:
        current_app.logger.error(f"File detail error: {e}", exc_info=True)
        return jsonify({'error': 'Failed to load file'}), 500


# ============================================================================
# WRITE ROUTES
# ============================================================================

@bp.route('/<int:file_id>/edit', methods=['POST'])
def edit(file_id):
    """
    Update alt text and tags.

    Form fields:
        - alt_text: New alt text
        - tags: Comma-separated tags, replacing the current ones
    """
    translator = get_translator(current_app)
    file = get_file_loader(current_app, get_db()).get_by_id(file_id)

    if not file:
        flash(translator.trans('file_manager.not_found', file_id=file_id), 'error')
        return redirect(url_for('file_manager.listing'))

    if 'alt_text' in request.form or 'tags' in request.form:
        try:
            if 'alt_text' in request.form:
                file.alt_text = validate_alt_text(request.form.get('alt_text'))
            if 'tags' in request.form:
                file.tags = parse_tags(request.form.get('tags'))
        except ValidationError as e:
            flash(str(e), 'error')
            return redirect(url_for('file_manager.detail', file_id=file.id))

        name = _display_name(file)
        if get_file_editor(get_db()).save(file, _current_user_id()):
            flash(translator.trans('file_manager.edit.success', name=name), 'success')
        else:
            flash(translator.trans('file_manager.edit.error', name=name), 'error')

    return redirect(url_for('file_manager.detail', file_id=file.id))


@bp.route('/<int:file_id>/delete', methods=['POST'])
def delete(file_id):
    """Soft-delete a file when the form confirms with 'delete'."""
    translator = get_translator(current_app)
    file = get_file_loader(current_app, get_db()).get_by_id(file_id)

    if not file:
        flash(translator.trans('file_manager.not_found', file_id=file_id), 'error')
        return redirect(url_for('file_manager.listing'))

    if request.form.get('delete'):
        name = _display_name(file)
        if get_file_editor(get_db()).delete(file, _current_user_id()):
            restore_url = url_for('file_manager.restore', file_id=file.id)
            flash(translator.trans('file_manager.delete.success',
                                   name=escape(name), restore_url=restore_url), 'success')
        else:
            flash(translator.trans('file_manager.delete.error', name=name), 'error')

    return redirect(url_for('file_manager.listing'))


@bp.route('/<int:file_id>/restore', methods=['GET', 'POST'])
def restore(file_id):
    """Undo a soft deletion."""
    translator = get_translator(current_app)
    file = get_file_loader(current_app, get_db()).get_by_id(
        file_id, visibility=Visibility.INCLUDE_DELETED
    )

    if not file:
        flash(translator.trans('file_manager.not_found', file_id=file_id), 'error')
        return redirect(url_for('file_manager.listing'))

    name = _display_name(file)
    if get_file_editor(get_db()).restore(file):
        flash(translator.trans('file_manager.restore.success', name=name), 'success')
    else:
        flash(translator.trans('file_manager.restore.error', name=name), 'error')

    return redirect(url_for('file_manager.listing'))
