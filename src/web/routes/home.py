import logging

from flask import Blueprint, render_template, request

from src.chat_import import ChatImportError
from src.web.services.conversation_loader import build_display_entries, file_info, load_uploaded_file


logger = logging.getLogger(__name__)

bp = Blueprint('home', __name__)


@bp.route('/')
def index():
    """主页"""
    return render_template('index.html')


@bp.route('/view', methods=['POST'])
def view_upload():
    """渲染上传文件的问答折叠列表；失败时只显示一条错误提示"""
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        return render_template('index.html', error='Please select a JSON file.'), 400

    try:
        loaded = load_uploaded_file(upload.read(), upload.filename)
    except ChatImportError as e:
        logger.warning(f"Rejected upload {upload.filename}: {e}")
        return render_template('index.html', error=e.user_message), 400

    return render_template(
        'index.html',
        info=file_info(loaded),
        entries=build_display_entries(loaded),
    )
