"""指标配置文件加载模块"""
import os
from typing import Any, Optional
import yaml


class ConfigError(Exception):
    """配置相关错误"""
    pass


class Config:
    """配置管理器

    支持YAML格式配置文件，提供点分隔的嵌套key访问。

    Example:
        config = Config("config/indicators.yaml")
        periods = config.get("indicators.ma_periods", [5, 10, 20])
        macd = config.get("indicators.macd_params_list")
    """

    def __init__(self, config_path: str):
        """初始化配置

        Args:
            config_path: 配置文件路径

        Raises:
            ConfigError: 文件不存在或格式错误
        """
        self._config_path = config_path

        if not os.path.exists(config_path):
            raise ConfigError(f"配置文件不存在: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"配置文件格式错误: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"配置文件顶层必须是映射: {config_path}")
        self._data = data

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """从内存中的字典构建配置（不关联文件）"""
        config = cls.__new__(cls)
        config._config_path = None
        config._data = dict(data)
        return config

    @property
    def path(self) -> Optional[str]:
        return self._config_path

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """获取配置值

        支持点分隔的嵌套key，如 "indicators.ma_periods"

        Args:
            key: 配置key，支持点分隔
            default: 默认值

        Returns:
            配置值或默认值
        """
        keys = key.split(".")
        value = self._data

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def section(self, key: str) -> dict:
        """获取一个子配置段，不存在或不是映射时返回空字典"""
        value = self.get(key, {})
        return value if isinstance(value, dict) else {}

    def __getitem__(self, key: str) -> Any:
        """支持字典式访问"""
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
