"""
Core - 配置、异常、日志与 Redis 连接等共享基础设施
"""
