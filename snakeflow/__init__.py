"""
蛇形排版引擎 - 核心模块

模块结构：
- config/     运行期配置与图案表加载
- models/     数据模型定义
- layout/     网格排版（图案表/网格几何/落位/流序编号/连线）
- pipeline/   分页编排与图层准备
- host/       宿主文档模型（内存实现）
"""

__version__ = "0.1.0"
