import logging

from flask import Blueprint, jsonify, request

from src.chat_import import ChatImportError
from src.config import Config
from src.utils import paginate
from src.web.services.conversation_loader import (
    build_display_entries,
    error_payload,
    file_info,
    load_texts_file,
    load_uploaded_file,
    parse_bool_query,
)


logger = logging.getLogger(__name__)
bp = Blueprint('exchanges', __name__)


@bp.route('/api/exchanges/<filename>', methods=['GET'])
def list_exchanges(filename):
    """texts/ 下某个文件归一化后的问答列表（分页）"""
    try:
        try:
            loaded = load_texts_file(filename)
        except FileNotFoundError:
            return jsonify({'success': False, 'error': '文件不存在'}), 404
        except ChatImportError as e:
            logger.warning(f"Cannot normalize {filename}: {e}")
            body, status = error_payload(e)
            return jsonify(body), status
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        try:
            page = max(1, int(request.args.get('page', 1)))
            page_size = max(1, int(request.args.get('page_size', Config.DEFAULT_PAGE_SIZE)))
        except ValueError:
            return jsonify({'success': False, 'error': 'page / page_size 必须是整数'}), 400
        include_responses = parse_bool_query(request.args.get('include_responses'), default=True)

        entries = build_display_entries(loaded, include_responses=include_responses)
        page_entries, total_pages = paginate(entries, page, page_size)

        return jsonify({
            'success': True,
            **file_info(loaded),
            'warnings': loaded.warnings,
            'exchanges': page_entries,
            'total': len(entries),
            'page': page,
            'page_size': page_size,
            'total_pages': total_pages,
        })
    except Exception as e:
        logger.error(f"Error listing exchanges: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500


@bp.route('/api/upload', methods=['POST'])
def upload_file():
    """上传 JSON 文件并直接返回问答列表"""
    try:
        upload = request.files.get('file')
        if upload is None or not upload.filename:
            return jsonify({'success': False, 'error': '未选择文件'}), 400

        try:
            loaded = load_uploaded_file(upload.read(), upload.filename)
        except ChatImportError as e:
            logger.warning(f"Rejected upload {upload.filename}: {e}")
            body, status = error_payload(e)
            return jsonify(body), status

        return jsonify({
            'success': True,
            **file_info(loaded),
            'warnings': loaded.warnings,
            'exchanges': build_display_entries(loaded),
        })
    except Exception as e:
        logger.error(f"Error handling upload: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500
