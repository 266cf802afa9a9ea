import logging
from datetime import datetime

from flask import Blueprint, jsonify, request

from src.chat_import import ChatImportError
from src.web.services.conversation_loader import (
    ALLOWED_SUFFIXES,
    error_payload,
    file_info,
    load_texts_file,
    texts_dir,
)


logger = logging.getLogger(__name__)
bp = Blueprint('files', __name__)


@bp.route('/api/files', methods=['GET'])
def get_files():
    """获取可查看的文件列表（从texts/目录）"""
    try:
        base = texts_dir()
        base.mkdir(parents=True, exist_ok=True)
        candidates = []
        for ext in ALLOWED_SUFFIXES:
            candidates.extend(base.glob(f'*{ext}'))

        files = []
        for f in candidates:
            try:
                st = f.stat()
            except OSError as e:
                logger.warning(f"Skipping {f}: {e}")
                continue
            files.append({
                'name': f.name,
                'size': st.st_size,
                'modified': datetime.fromtimestamp(st.st_mtime).isoformat(),
                'ext': f.suffix.lower(),
            })

        files.sort(key=lambda x: x.get('modified', ''), reverse=True)

        return jsonify({'success': True, 'files': files, 'count': len(files)})
    except Exception as e:
        logger.error(f"Error getting files: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500


@bp.route('/api/load', methods=['POST'])
def load_file():
    """加载并归一化 texts/ 下的文件，返回文件概要与警告"""
    try:
        data = request.get_json(silent=True) or {}
        filename = data.get('filename')

        if not filename:
            return jsonify({'success': False, 'error': '未指定文件名'}), 400

        try:
            loaded = load_texts_file(filename)
        except FileNotFoundError:
            return jsonify({'success': False, 'error': '文件不存在'}), 404
        except ChatImportError as e:
            logger.warning(f"Cannot load {filename}: {e}")
            body, status = error_payload(e)
            return jsonify(body), status
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        logger.info(f"Loaded file: {filename} ({len(loaded.exchanges)} exchanges)")

        return jsonify({
            'success': True,
            **file_info(loaded),
            'warnings': loaded.warnings,
        })
    except Exception as e:
        logger.error(f"Error loading file: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500
