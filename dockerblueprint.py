#!/usr/bin/env python3
"""
Dockerfile Blueprint - command-line front end for the instruction graph editor
Features:
 - lint: validate Dockerfiles (recursively), best-practice suggestions,
   buildability summary, JSON/CSV/HTML reports, custom rule packs
 - import: Dockerfile -> instruction graph (JSON)
 - export: instruction graph (JSON) -> Dockerfile, in topological order
 - templates: list or render the starter templates
 - catalog: list known instructions
"""

import argparse
import csv
import json
import logging
import os
import sys
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed

from colorama import Fore, Style, init as colorama_init
from tqdm import tqdm

from blueprint import catalog, rules_engine, report_generator, templates
from blueprint.editor_state import EditorState
from blueprint.errors import BlueprintError
from blueprint.graph_model import Graph

colorama_init(autoreset=True)

# logging
logger = logging.getLogger("dockerblueprint")
logger.setLevel(logging.INFO)
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(h)


# ---------------------------
# File utilities & linting
# ---------------------------
def is_dockerfile_name(name):
    return name.startswith("Dockerfile") or name.lower().endswith(".dockerfile")


def collect_files(path):
    if os.path.isfile(path):
        return [path]
    files = []
    for root, _, fnames in os.walk(path):
        for fn in fnames:
            if is_dockerfile_name(fn):
                files.append(os.path.join(root, fn))
    return sorted(files)


def safe_read_text(path):
    try:
        with open(path, 'r', encoding='utf-8', errors='ignore') as fh:
            return fh.read()
    except OSError as e:
        logger.debug("Read error for %s: %s", path, e)
        return None


def read_error_entry(path, reason):
    return {"file": path, "is_valid": False,
            "issues": [{"line": 0, "message": reason, "severity": rules_engine.ERROR}],
            "suggestions": [], "buildability": ""}


def lint_file(path, custom_rules=None):
    content = safe_read_text(path)
    if content is None:
        return read_error_entry(path, "Could not read file")
    return rules_engine.run_rules(path, content, custom_rules=custom_rules)


def lint_paths(paths, custom_rules=None, threads=6, progress=True):
    files = []
    for p in paths:
        files.extend(collect_files(p))

    reports = []
    bar = tqdm(total=len(files), desc='Linting Dockerfiles', disable=not progress)
    with ThreadPoolExecutor(max_workers=max(1, threads)) as ex:
        future_to_file = {ex.submit(lint_file, f, custom_rules): f for f in files}
        for fut in as_completed(future_to_file):
            fpath = future_to_file[fut]
            try:
                reports.append(fut.result())
            except Exception as e:
                logger.exception("Exception linting file %s", fpath)
                reports.append(read_error_entry(fpath, f"Exception during lint: {e}"))
            bar.update(1)
    bar.close()
    return sorted(reports, key=lambda r: r["file"])


# ---------------------------
# Exports: JSON/CSV
# ---------------------------
def save_json(data, path):
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'w', encoding='utf-8') as jf:
        json.dump(data, jf, indent=2)
    logger.info("JSON report: %s", path)


def save_csv(reports, path):
    keys = ['file', 'kind', 'line', 'severity', 'message']
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'w', newline='', encoding='utf-8') as fh:
        w = csv.DictWriter(fh, fieldnames=keys)
        w.writeheader()
        for r in reports:
            for i in r.get("issues", []):
                w.writerow({"file": r["file"], "kind": "issue", "line": i["line"],
                            "severity": i["severity"], "message": i["message"]})
            for s in r.get("suggestions", []):
                w.writerow({"file": r["file"], "kind": "suggestion", "line": "",
                            "severity": "", "message": s})
    logger.info("CSV report: %s", path)


# ---------------------------
# Console output
# ---------------------------
class PerfMeter:
    def __init__(self):
        self.start = time.time()

    def report(self, files):
        elapsed = time.time() - self.start
        return {'elapsed_s': round(elapsed, 2), 'files': files,
                'fps': round(files / elapsed, 2) if elapsed > 0 else 0}


def print_report(r):
    verdict = f"{Fore.GREEN}valid" if r["is_valid"] else f"{Fore.RED}invalid"
    print(f"[{verdict}{Style.RESET_ALL}] {r['file']}")
    for i in r.get("issues", []):
        print(f"    {Fore.RED}→ Line {i['line']}: {i['message']}{Style.RESET_ALL}")
    for s in r.get("suggestions", []):
        print(f"    {Fore.YELLOW}→ {s}{Style.RESET_ALL}")
    if r.get("buildability"):
        print(f"    {Fore.CYAN}{r['buildability']}{Style.RESET_ALL}")
    print("")


def print_summary(reports, perf=None):
    c = Counter("valid" if r["is_valid"] else "invalid" for r in reports)
    print("\n=== Lint Summary ===")
    print(f"Files checked: {len(reports)}")
    print(f"  {Fore.GREEN}valid: {c.get('valid', 0)}{Style.RESET_ALL}")
    print(f"  {Fore.RED}invalid: {c.get('invalid', 0)}{Style.RESET_ALL}")
    print(f"Suggestions: {sum(len(r.get('suggestions', [])) for r in reports)}")
    if perf:
        print("\nPerformance:")
        for k, v in perf.items():
            print(f"  {k}: {v}")
    print("====================\n")


# ---------------------------
# Subcommands
# ---------------------------
def cmd_lint(args):
    custom_rules = rules_engine.load_custom_ruleset(args.rules) if args.rules else None
    perf = PerfMeter()
    reports = lint_paths(args.paths, custom_rules=custom_rules, threads=args.threads,
                         progress=not args.json_only)
    if not reports:
        logger.warning("No Dockerfiles found in: %s", ", ".join(args.paths))

    save_json(reports, os.path.join(args.out, 'report.json'))
    if args.export_csv:
        save_csv(reports, os.path.join(args.out, 'report.csv'))
    if not args.no_html and not args.json_only:
        report_generator.generate_full_html(reports, os.path.join(args.out, 'report.html'),
                                            open_browser=args.open)

    if not args.json_only:
        if not args.summary:
            for r in reports:
                print_report(r)
        print_summary(reports, perf.report(len(reports)))

    if args.fail_on_error and any(not r["is_valid"] for r in reports):
        print('Failing on invalid Dockerfiles (exit code 1).')
        return 1
    return 0


def _write_output(text, output):
    if output:
        with open(output, 'w', encoding='utf-8') as fh:
            fh.write(text)
        logger.info("Wrote %s", output)
    else:
        print(text)


def cmd_import(args):
    content = safe_read_text(args.dockerfile)
    if content is None:
        logger.error("Could not read %s", args.dockerfile)
        return 2
    state = EditorState()
    graph = state.import_dockerfile(content, file_name=os.path.basename(args.dockerfile))
    doc = dict(graph.to_dict(), file_name=state.file_name)
    _write_output(json.dumps(doc, indent=2), args.output)
    return 0


def cmd_export(args):
    with open(args.graph, 'r', encoding='utf-8') as fh:
        doc = json.load(fh)
    state = EditorState()
    state.load_graph(Graph.from_dict(doc), file_name=doc.get("file_name"))
    if args.output:
        content = state.dockerfile_content()
        if not content:
            logger.warning("Graph %s renders to an empty Dockerfile", args.graph)
        _write_output(content, args.output)
    else:
        print(state.export_text())
    return 0


def cmd_templates(args):
    if not args.template_id:
        for t in templates.list_templates():
            print(f"  {t['id']:<12} {t['name']}")
        return 0
    state = EditorState()
    graph = state.load_template(args.template_id)
    if args.graph:
        print(json.dumps(graph.to_dict(), indent=2))
    else:
        print(state.dockerfile_content())
    return 0


def cmd_catalog(args):
    for spec in catalog.list_specs(include_advanced=args.advanced):
        flag = f" {Fore.MAGENTA}(advanced){Style.RESET_ALL}" if spec.advanced else ""
        print(f"  {spec.id:<20} {spec.keyword.value:<12} {spec.description}{flag}")
        if args.verbose:
            print(f"      default: {spec.default_arguments}")
    return 0


def build_parser():
    p = argparse.ArgumentParser(description='Dockerfile Blueprint - Dockerfile graph editor tools')
    p.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    sub = p.add_subparsers(dest='command', required=True)

    lint = sub.add_parser('lint', help='Validate Dockerfiles and write reports')
    lint.add_argument('paths', nargs='+', help='Dockerfiles or folders to lint')
    lint.add_argument('--out', '-o', default='./reports', help='Output folder for reports')
    lint.add_argument('--summary', action='store_true', help='Only print the summary')
    lint.add_argument('--fail-on-error', action='store_true', help='Exit code 1 if any Dockerfile is invalid')
    lint.add_argument('--no-html', action='store_true', help='Do not generate HTML report')
    lint.add_argument('--json-only', action='store_true', help='Only produce JSON output')
    lint.add_argument('--export-csv', action='store_true', help='Also export CSV')
    lint.add_argument('--rules', help='Path to custom rules JSON')
    lint.add_argument('--threads', type=int, default=6, help='Parallel worker threads')
    lint.add_argument('--open', action='store_true', help='Open the HTML report in a browser')
    lint.set_defaults(func=cmd_lint)

    imp = sub.add_parser('import', help='Convert a Dockerfile into a graph JSON document')
    imp.add_argument('dockerfile')
    imp.add_argument('--output', '-o', help='Write the graph here instead of stdout')
    imp.set_defaults(func=cmd_import)

    exp = sub.add_parser('export', help='Render a graph JSON document as a Dockerfile')
    exp.add_argument('graph')
    exp.add_argument('--output', '-o', help='Write the Dockerfile here instead of stdout')
    exp.set_defaults(func=cmd_export)

    tpl = sub.add_parser('templates', help='List templates or print one')
    tpl.add_argument('template_id', nargs='?')
    tpl.add_argument('--graph', action='store_true', help='Print the template graph as JSON')
    tpl.set_defaults(func=cmd_templates)

    cat = sub.add_parser('catalog', help='List known instructions')
    cat.add_argument('--advanced', action='store_true', help='Include advanced instructions')
    cat.set_defaults(func=cmd_catalog)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)
        pkg_logger = logging.getLogger("blueprint")
        pkg_logger.setLevel(logging.DEBUG)
        if not pkg_logger.handlers:
            pkg_logger.addHandler(logger.handlers[0])
    try:
        return args.func(args)
    except (BlueprintError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 2


if __name__ == '__main__':
    sys.exit(main())
