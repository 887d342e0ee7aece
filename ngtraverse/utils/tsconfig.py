import os
import re
import json
from typing import Dict, List, Optional

from ngtraverse.utils.logger import get_logger

logger = get_logger("tsconfig")


def find_tsconfig_dir(root_dir: str, file_path: str, config_filename: str = "tsconfig.json") -> Optional[str]:
    root_dir = os.path.abspath(root_dir)
    current_dir = os.path.abspath(os.path.dirname(file_path))

    while True:
        candidate = os.path.join(current_dir, config_filename)
        if os.path.isfile(candidate):
            return current_dir

        parent = os.path.dirname(current_dir)
        if current_dir == root_dir or parent == current_dir:
            return None

        current_dir = parent


def _strip_json_comments(text: str) -> str:
    text = re.sub(r'/\*[\s\S]*?\*/', '', text)
    text = re.sub(r'(?m)^\s*//.*$', '', text)
    text = re.sub(r',(\s*[}\]])', r'\1', text)
    return text


def read_compiler_options(config_file_path: str) -> dict:
    if not os.path.isfile(config_file_path):
        return {}

    try:
        with open(config_file_path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as e:
        logger.warning("Unable to read %s: %s", config_file_path, e)
        return {}

    clean = _strip_json_comments(raw).strip()
    if not clean:
        return {}

    try:
        cfg = json.loads(clean)
    except json.JSONDecodeError as e:
        logger.warning("Unable to parse %s: %s", config_file_path, e)
        return {}

    options = cfg.get("compilerOptions", {}) if isinstance(cfg, dict) else {}
    return options if isinstance(options, dict) else {}


def paths_aliases_from_tsconfig(config_file_path: str) -> dict:
    paths = read_compiler_options(config_file_path).get("paths", {})
    if isinstance(paths, dict):
        return paths
    return {}


def paths_base_dir(config_dir: str, compiler_options: dict) -> str:
    """Directory `paths` targets are relative to: `baseUrl` when set, else the tsconfig's own directory."""
    base_url = compiler_options.get("baseUrl")
    if isinstance(base_url, str) and base_url:
        return os.path.normpath(os.path.join(config_dir, base_url))
    return config_dir


def resolve_alias(module_specifier: str, base_dir: str, alias_paths: Dict[str, List[str]]) -> Optional[str]:
    def sort_key(item):
        pat = item[0]
        return (pat.count("*"), -len(pat))

    for alias_pattern, targets in sorted(alias_paths.items(), key=sort_key):
        if "*" in alias_pattern:
            regex = "^" + re.escape(alias_pattern).replace(r"\*", "(.+)") + "$"
            m = re.match(regex, module_specifier)
            if not m:
                continue
            wildcards = m.groups()
        else:
            if module_specifier != alias_pattern:
                continue
            wildcards = ()

        for tpl in targets:
            rel = tpl
            for w in wildcards:
                rel = rel.replace("*", w, 1)
            return os.path.normpath(os.path.join(base_dir, rel))

    return None


class ModuleResolver:
    """Resolves tsconfig `paths` aliases for files under one project root."""

    def __init__(self, root_dir: str):
        self.root_dir = root_dir
        self._aliases = {}

    def aliases_for(self, file_path: str):
        """Base directory and `paths` of the tsconfig governing `file_path`."""
        config_dir = find_tsconfig_dir(self.root_dir, file_path)
        if config_dir is None:
            return None, {}
        if config_dir not in self._aliases:
            options = read_compiler_options(os.path.join(config_dir, "tsconfig.json"))
            paths = options.get("paths", {})
            self._aliases[config_dir] = (
                paths_base_dir(config_dir, options),
                paths if isinstance(paths, dict) else {},
            )
        return self._aliases[config_dir]

    def resolve(self, module_specifier: str, file_path: str) -> Optional[str]:
        """Resolve an aliased specifier; paths relative to the root give root-relative results."""
        relative = not os.path.isabs(file_path)
        if relative:
            file_path = os.path.join(self.root_dir, file_path)
        base_dir, alias_paths = self.aliases_for(file_path)
        if not alias_paths:
            return None
        resolved = resolve_alias(module_specifier, base_dir, alias_paths)
        if resolved is None:
            return None
        if not resolved.endswith((".ts", ".tsx")):
            resolved += ".ts"
        if relative:
            resolved = os.path.relpath(resolved, os.path.abspath(self.root_dir)).replace("\\", "/")
        return resolved
