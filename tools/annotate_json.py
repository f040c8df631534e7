import argparse
import json
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def _load_payload(path: Path) -> tuple[dict, list]:
    """支持两种结构：{"document": {...}, "comments": [...]} 或直接是节点树"""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if "document" in data:
        return data["document"], data.get("comments", [])
    return data, []


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Annotate a design tree JSON dump."
    )
    parser.add_argument("input", help="设计树JSON文件")
    parser.add_argument(
        "--environment",
        default=None,
        help="规则环境档位（默认：读取运行期配置）",
    )
    parser.add_argument(
        "--rules",
        default="",
        help="可选：YAML规则覆盖文件",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="输出紧凑结构（含评论指令）",
    )
    parser.add_argument(
        "--out",
        default="",
        help="输出文件（默认：打印到标准输出）",
    )
    args = parser.parse_args()

    _add_backend_to_path()
    from design_annotator.config import RuleLoader, configure_logging  # type: ignore
    from design_annotator.pipeline import DesignProcessor  # type: ignore

    configure_logging()

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"输入文件不存在: {input_path}")
        return 1

    overrides = RuleLoader.load(args.rules) if args.rules else None
    processor = DesignProcessor(overrides, environment=args.environment)

    tree, comments = _load_payload(input_path)
    walk_result = processor.process_with_stats(tree)
    annotated = walk_result.root
    instructions = processor.process_comments(annotated, comments) if comments else []

    if args.compact:
        result = processor.optimize_for_ai(annotated, instructions)
    else:
        result = {
            "document": annotated.to_dict(),
            "instructions": [i.model_dump(mode="json") for i in instructions],
        }
    result["stats"] = walk_result.stats.model_dump()

    text = json.dumps(result, ensure_ascii=False, indent=2)
    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
        print(f"已写入: {args.out}")
    else:
        print(text)

    stats = processor.get_stats()
    if stats.errors:
        print(f"处理错误 {len(stats.errors)} 条", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
