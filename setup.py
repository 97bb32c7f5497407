"""
Idle Conductor 安装配置
"""
from setuptools import setup, find_packages

setup(
    name="idle-conductor",
    version="1.0.0",
    description="配置驱动的作业执行框架，支持基于队列的分发与消息确认",
    author="Idle Conductor Team",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "loguru>=0.7",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "redis>=4.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "idle-consumer=queues.main:main",
        ],
    },
)
