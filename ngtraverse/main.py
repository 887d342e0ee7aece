import argparse
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor, wait
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path

import pathspec
from tqdm import tqdm

from ngtraverse.config import RunConfig
from ngtraverse.metadata.root import create_empty_model, dumps
from ngtraverse.registry.extractor_registry import INVERSE_EXTS, get_extractor
from ngtraverse.utils.logger import configure_logging, get_logger
from ngtraverse.utils.tsconfig import ModuleResolver

logger = get_logger("main")

ALWAYS_IGNORED = ["node_modules/", ".git/"]
SPEC_SUFFIXES = (".spec.ts", ".spec.tsx")
POLL_INTERVAL = 0.05


def discover_files(root_dir, config: RunConfig = None):
    """TypeScript files under `root_dir` not excluded by its .gitignore, in path order."""
    config = config or RunConfig()
    root_dir = Path(root_dir)
    gitignore_pth = root_dir / ".gitignore"
    gitign_pattern = gitignore_pth.read_text().splitlines() if gitignore_pth.exists() else []
    spec = pathspec.PathSpec.from_lines("gitwildmatch", ALWAYS_IGNORED + gitign_pattern)

    files = []
    for file_path in root_dir.rglob("*"):
        if not file_path.is_file() or file_path.suffix not in config.extensions:
            continue
        if spec.match_file(file_path.relative_to(root_dir).as_posix()):
            continue
        if not config.include_specs and file_path.name.endswith(SPEC_SUFFIXES):
            continue
        files.append(file_path)
    return sorted(files)


def _process_single_file_worker(args):
    code_path, root_dir_path, resolver = args
    extractor = get_extractor(INVERSE_EXTS[code_path.suffix], resolver=resolver)
    rel_path = os.path.relpath(code_path, root_dir_path).replace("\\", "/")
    extractor.process_file(str(code_path), filepath=rel_path)
    return extractor.extract_model()


def _timed_worker(started, index, args):
    started[index] = time.monotonic()
    return _process_single_file_worker(args)


def _await_shard(future, started, index, file_timeout):
    """Result of `future`, allowing `file_timeout` seconds from when its file started running."""
    while not future.done():
        start = started.get(index)
        if start is not None and time.monotonic() - start >= file_timeout:
            raise FutureTimeoutError()
        wait([future], timeout=POLL_INTERVAL)
    return future.result()


def collect_metadata(root_dir, config: RunConfig = None, progress: bool = True):
    """Run the extraction over every discovered file and merge the per-file models in file order.

    Files that raise or run longer than ``config.file_timeout`` seconds are logged and skipped;
    time spent queued behind other files does not count.
    """
    config = config or RunConfig()
    files = discover_files(root_dir, config)
    resolver = ModuleResolver(str(root_dir))
    model = create_empty_model()
    logger.info("Collecting metadata from %d files under %s", len(files), root_dir)

    executor = ThreadPoolExecutor(max_workers=config.max_workers)
    try:
        started = {}
        futures = [
            (path, executor.submit(_timed_worker, started, index, (path, root_dir, resolver)))
            for index, path in enumerate(files)
        ]
        for index, (code_path, future) in enumerate(
            tqdm(futures, desc="Collecting metadata", unit="file", disable=not progress)
        ):
            try:
                shard = _await_shard(future, started, index, config.file_timeout)
            except FutureTimeoutError:
                future.cancel()
                logger.error("Timed out after %ss - %s. Skipping it.", config.file_timeout, code_path)
                continue
            except Exception:
                logger.exception("Unable to process - %s. Skipping it.", code_path)
                continue
            model.extend(shard)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
    return model


def write_metadata(model, output_path):
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(dumps(model))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Angular/TypeScript declaration metadata tool")
    subparsers = parser.add_subparsers(dest="function", help="Available functions")

    parser_collect = subparsers.add_parser("collect", help="Collect declaration metadata from source code")
    parser_collect.add_argument("root_dir", help="Root directory to scan for TypeScript files")
    parser_collect.add_argument("--output", default=None, help="Output JSON file (default: print to stdout)")
    parser_collect.add_argument("--max_workers", type=int, default=None, help="Worker threads")
    parser_collect.add_argument("--file_timeout", type=float, default=None, help="Seconds allowed per file")
    parser_collect.add_argument("--include_specs", action="store_true", help="Also collect *.spec.ts files")
    parser_collect.add_argument("--verbose", action="store_true", help="Log debug diagnostics")

    args = parser.parse_args(argv)

    if not args.function:
        parser.print_help()
        return

    configure_logging(verbose=args.verbose or None)

    try:
        if args.function == "collect":
            if not os.path.isdir(args.root_dir):
                raise ValueError(f"Not a directory: {args.root_dir}")
            config = RunConfig(include_specs=args.include_specs)
            if args.max_workers:
                config.max_workers = args.max_workers
            if args.file_timeout:
                config.file_timeout = args.file_timeout

            model = collect_metadata(args.root_dir, config, progress=args.output is not None)
            if args.output:
                write_metadata(model, args.output)
                print(f"Done! Metadata written to: {args.output}")
            else:
                print(dumps(model))

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
