"""
配置管理模块 - 读取和验证环境变量
"""

import os
from dotenv import load_dotenv

# 加载 .env 文件
load_dotenv()


class Config:
    """应用配置类"""

    # Flask配置
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    HOST = os.getenv('FLASK_HOST', '127.0.0.1')
    PORT = int(os.getenv('FLASK_PORT', 5000))

    # 日志级别
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').strip().upper()

    # 文件配置
    MAX_FILE_SIZE_MB = int(os.getenv('MAX_FILE_SIZE_MB', 50))
    TEXTS_DIR = os.getenv('TEXTS_DIR', 'texts')

    # 展示配置
    PROMPT_LABEL_MAX_CHARS = int(os.getenv('PROMPT_LABEL_MAX_CHARS', 100))
    RESPONSE_JSON_INDENT = int(os.getenv('RESPONSE_JSON_INDENT', 2))
    DEFAULT_PAGE_SIZE = int(os.getenv('DEFAULT_PAGE_SIZE', 50))

    @classmethod
    def validate_config(cls):
        """验证配置的有效性"""
        issues = []

        if cls.MAX_FILE_SIZE_MB < 1:
            issues.append("❌ MAX_FILE_SIZE_MB 配置无效")

        if cls.PROMPT_LABEL_MAX_CHARS < 1:
            issues.append("❌ PROMPT_LABEL_MAX_CHARS 必须大于 0")
        elif cls.PROMPT_LABEL_MAX_CHARS < 20:
            issues.append("⚠️  PROMPT_LABEL_MAX_CHARS 过小，标题可能难以辨认")

        if cls.RESPONSE_JSON_INDENT < 0 or cls.RESPONSE_JSON_INDENT > 8:
            issues.append("❌ RESPONSE_JSON_INDENT 必须在 0-8 之间")

        if cls.DEFAULT_PAGE_SIZE < 1:
            issues.append("❌ DEFAULT_PAGE_SIZE 必须大于 0")

        if cls.LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            issues.append(f"⚠️  LOG_LEVEL={cls.LOG_LEVEL} 无法识别，将使用 INFO")

        return issues

    @classmethod
    def print_config_status(cls):
        """打印配置状态"""
        print("\n" + "="*50)
        print("📋 应用配置状态")
        print("="*50)
        print(f"Flask: {cls.HOST}:{cls.PORT} (DEBUG={cls.DEBUG})")
        print(f"日志级别: {cls.LOG_LEVEL}")
        print(f"最大文件: {cls.MAX_FILE_SIZE_MB}MB")
        print(f"文件目录: {cls.TEXTS_DIR}")
        print(f"标题长度: {cls.PROMPT_LABEL_MAX_CHARS} 字符")
        print(f"回复缩进: {cls.RESPONSE_JSON_INDENT}")
        print(f"分页大小: {cls.DEFAULT_PAGE_SIZE}")

        # 验证并显示问题
        issues = cls.validate_config()
        if issues:
            print("\n⚠️  配置问题:")
            for issue in issues:
                print(f"   {issue}")
        else:
            print("\n✅ 配置全部有效")

        print("="*50 + "\n")


if __name__ == '__main__':
    Config.print_config_status()
