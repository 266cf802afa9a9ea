"""
Flask Web应用 - 聊天记录提示词查看器
上传任意聊天工具导出的 JSON，按顺序列出每一次提问及其回复
"""

import logging

# 立即加载 .env 文件
from dotenv import load_dotenv
load_dotenv()

from flask import Flask, jsonify
from flask_cors import CORS
from src.config import Config
from src.web.routes import register_blueprints

# 配置日志
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# 创建Flask应用
app = Flask(__name__, template_folder='templates')

# CORS配置
CORS(app, resources={
    r"/api/*": {
        "origins": "*",
        "methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Content-Type"]
    }
})

# 应用配置
app.config.from_object(Config)
app.config['MAX_CONTENT_LENGTH'] = Config.MAX_FILE_SIZE_MB * 1024 * 1024

# 回复原样输出：不对 key 重新排序
app.json.sort_keys = False

register_blueprints(app)

# ============ 错误处理 ============

@app.errorhandler(400)
def bad_request(error):
    return jsonify({'success': False, 'error': '请求错误', 'message': str(error)}), 400


@app.errorhandler(404)
def not_found(error):
    return jsonify({'success': False, 'error': '资源不存在', 'message': str(error)}), 404


@app.errorhandler(413)
def payload_too_large(error):
    return jsonify({
        'success': False,
        'error': f'文件过大 (> {Config.MAX_FILE_SIZE_MB}MB)',
    }), 413


@app.errorhandler(500)
def internal_error(error):
    logger.error(f"Internal server error: {error}")
    return jsonify({'success': False, 'error': '服务器错误', 'message': '请稍后重试'}), 500


@app.route('/favicon.ico')
def favicon():
    return ('', 204)


# ============ 启动应用 ============

if __name__ == '__main__':
    # 打印配置状态
    Config.print_config_status()

    logger.info(f"Starting Flask app on {Config.HOST}:{Config.PORT}")

    # 启动应用
    app.run(
        host=Config.HOST,
        port=Config.PORT,
        debug=Config.DEBUG,
        use_reloader=False
    )
