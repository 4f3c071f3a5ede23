"""Text and JSON renderings of a resolution."""

import json


def format_search_path(search_path):
    return "Path lookup order:\n" + "\n".join(search_path) + "\n"


def format_listing(resolution):
    lines = [f"Target: {resolution.target}, Class: {resolution.info.elf_class}"]
    for name, path in resolution.dependencies().items():
        lines.append(f"  {name} => {path}")
    return "\n".join(lines)


def format_tree(graph):
    lines = []

    def _line(record, depth):
        lines.append("  |" * depth + f"-{record.name}")

    graph.walk_depth_first(_line)
    return "\n".join(lines)


def to_dict(resolution):
    return {
        "target": resolution.target,
        "class": resolution.info.elf_class,
        "machine": resolution.info.machine,
        "search_path": list(resolution.search_path),
        "dependencies": resolution.dependencies(),
        "missing": resolution.missing(),
        "edges": [list(edge) for edge in resolution.graph.edges()],
    }


def write_json(resolution, output_path):
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(to_dict(resolution), f, indent=2)
