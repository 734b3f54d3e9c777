"""
运行期配置 - 读取 snakeflow 运行期 YAML

职责：
- 加载网格/描边/图层/选择/曲线等运行参数
- 提供环境变量覆盖机制（SNAKEFLOW_GRID__MARGIN=40）
- 类型安全的配置访问

默认值即外部契约：每页12个对象、边距36、间距34、色调20%、粗细20pt。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from ..models import SLOTS_PER_PAGE, PathStyle


class GridConfig(BaseModel):
    """网格配置"""

    objects_per_page: int = Field(SLOTS_PER_PAGE, ge=1, le=SLOTS_PER_PAGE)  # 网格固定4×3
    margin: float = 36.0
    gap: float = 34.0  # 12mm


class PathStyleConfig(BaseModel):
    """连线样式配置"""

    stroke_color: str = "Black"
    stroke_tint: float = 20.0
    stroke_weight: float = 20.0
    fill_color: str = "None"

    def to_style(self) -> PathStyle:
        return PathStyle(**self.model_dump())


class LayerConfig(BaseModel):
    """图层配置"""

    bg_layer: str = "BG"
    bg_path_layer: str = "BG PATH"
    path_layer: str = "BG"  # 连线所在图层


class SelectionConfig(BaseModel):
    """图案选择配置"""

    max_dialog_pages: int = 6  # 超过则跳过对话框
    default_pattern_id: int = 1


class CurveConfig(BaseModel):
    """平滑点转换配置"""

    settle_delay_ms: int = 100  # 选中后等待


class NumberingConfig(BaseModel):
    """编号配置"""

    list_name_template: str = "SnakeList_Page_{page}"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "snakeflow.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    # 图案表（为空时使用包内 patterns.yaml）
    patterns_path: Path | None = None

    # 各子配置
    grid: GridConfig = Field(default_factory=GridConfig)
    path_style: PathStyleConfig = Field(default_factory=PathStyleConfig)
    layers: LayerConfig = Field(default_factory=LayerConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    curve: CurveConfig = Field(default_factory=CurveConfig)
    numbering: NumberingConfig = Field(default_factory=NumberingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "SNAKEFLOW_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        config = cls(
            grid=GridConfig(**cls._extract(runtime_opts, "grid")),
            path_style=PathStyleConfig(**cls._extract(runtime_opts, "path_style")),
            layers=LayerConfig(**cls._extract(runtime_opts, "layers")),
            selection=SelectionConfig(**cls._extract(runtime_opts, "selection")),
            curve=CurveConfig(**cls._extract(runtime_opts, "curve")),
            numbering=NumberingConfig(**cls._extract(runtime_opts, "numbering")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

        patterns_path = runtime_opts.get("patterns_path")
        if patterns_path:
            config._resolve_patterns_path(Path(patterns_path), base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key, {}) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_patterns_path(self, patterns_path: Path, base_dir: Path) -> None:
        """相对路径基于配置文件所在目录解析"""
        if not patterns_path.is_absolute():
            patterns_path = (base_dir / patterns_path).resolve()
        self.patterns_path = patterns_path


# 全局配置实例
_config: RuntimeConfig | None = None

DEFAULT_CONFIG_PATH = Path("config/snakeflow_runtime.yaml")


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
