"""
配置合并工具
"""

import copy
from typing import Any, Dict, Mapping


def merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    递归合并两个配置字典

    - 两侧同名键都是字典时递归合并
    - 其余情况（包括列表）以 override 的值为准
    - 不修改入参

    Args:
        base: 基础配置（如 queues.default）
        override: 覆盖配置（如 queues.<id>）

    Returns:
        合并后的新字典
    """
    result: Dict[str, Any] = copy.deepcopy(dict(base))

    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = merge(current, value)
        else:
            result[key] = copy.deepcopy(value)

    return result
