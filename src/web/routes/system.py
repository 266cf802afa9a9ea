import logging

from flask import Blueprint, jsonify

from src.config import Config


logger = logging.getLogger(__name__)
bp = Blueprint('system', __name__)

APP_NAME = 'Chat Prompt Viewer'
APP_VERSION = '1.0.0'


@bp.route('/api/system/info', methods=['GET'])
def system_info():
    """获取系统信息"""
    try:
        return jsonify({
            'success': True,
            'app_name': APP_NAME,
            'version': APP_VERSION,
            'flask_host': Config.HOST,
            'flask_port': Config.PORT,
            'max_file_size_mb': Config.MAX_FILE_SIZE_MB,
            'prompt_label_max_chars': Config.PROMPT_LABEL_MAX_CHARS,
        })
    except Exception as e:
        logger.error(f"Error getting system info: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500
