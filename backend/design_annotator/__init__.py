"""
设计树注解引擎 - 后端核心模块

模块结构：
- config/     规则配置加载与运行期配置
- models/     数据模型定义（节点/注解/规则/评论）
- annotate/   节点过滤、属性生成、自定义规则、上下文精简
- pipeline/   树遍历编排与处理器入口
- spatial/    评论坐标匹配
"""

__version__ = "0.1.0"
