# blueprint/report_generator.py - HTML lint report
# ------------------------------------------------
# Features:
#  - One card per Dockerfile: verdict, buildability summary, errors, suggestions
#  - Background context for every message (see explainer.get_context)
#  - Chart.js doughnut of valid vs invalid files
#  - Client-side filtering and JSON export
#  - Optional auto-open in the browser
# ------------------------------------------------

from jinja2 import Template
from collections import Counter
import datetime, json, logging, os, webbrowser

from .explainer import get_context

logger = logging.getLogger(__name__)

HTML_TEMPLATE = r"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <title>Dockerfile Blueprint - Lint Report</title>
  <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
  <style>
    :root {
      --bg: #0b1220;
      --card: rgba(20,30,55,0.75);
      --accent: #38bdf8;
      --text: #e2e8f0;
      --meta: #94a3b8;
      --error: #ef4444;
      --hint: #f59e0b;
      --ok: #22c55e;
    }
    body { background: var(--bg); color: var(--text); font-family: 'Inter', Arial, sans-serif; margin: 0; padding: 30px; }
    h1 { color: var(--accent); text-align: center; margin-bottom: 6px; }
    .meta { color: var(--meta); font-size: 14px; }
    .center { text-align: center; }
    .card { background: var(--card); border: 1px solid rgba(255,255,255,0.06); padding: 18px;
            border-radius: 12px; margin: 18px auto; max-width: 1000px; }
    .badge { padding: 3px 9px; border-radius: 999px; font-size: 12px; font-weight: bold; color: #fff; }
    .valid { background: var(--ok); }
    .invalid { background: var(--error); }
    .issue { border-left: 3px solid var(--error); padding: 6px 10px; margin-top: 8px; }
    .suggestion { border-left: 3px solid var(--hint); padding: 6px 10px; margin-top: 8px; }
    .context { color: var(--meta); font-size: 13px; margin-top: 3px; }
    .search { padding: 8px; border-radius: 6px; border: 1px solid #1e293b; background: #0f172a; color: var(--text); }
    button { background: var(--accent); border: none; padding: 8px 12px; border-radius: 8px; font-weight: 600; cursor: pointer; }
    .footer { color: var(--meta); font-size: 13px; text-align: center; margin-top: 30px; }
  </style>
</head>
<body>
  <h1>Dockerfile Blueprint - Lint Report</h1>
  <div class="meta center">Generated: {{ generated }}</div>

  <div class="card" id="summary">
    <canvas id="verdictChart" height="90"></canvas>
    <p class="center">
      Files: <b>{{ file_count }}</b> &bull; Valid: <b>{{ valid_count }}</b> &bull;
      Errors: <b>{{ error_count }}</b> &bull; Suggestions: <b>{{ suggestion_count }}</b>
    </p>
    <div class="center">
      <input id="searchBox" class="search" placeholder="Filter by file name...">
      <select id="verdictFilter" class="search">
        <option value="">All files</option><option value="valid">Valid</option><option value="invalid">Invalid</option>
      </select>
      <button onclick="exportJSON()">JSON</button>
    </div>
  </div>

  {% for r in reports %}
  <div class="card report" data-file="{{ r.file|lower }}" data-verdict="{{ 'valid' if r.is_valid else 'invalid' }}">
    <h3>{{ r.file }} <span class="badge {{ 'valid' if r.is_valid else 'invalid' }}">{{ 'valid' if r.is_valid else 'invalid' }}</span></h3>
    <div class="meta">{{ r.buildability }}</div>
    {% for i in r.issues %}
    <div class="issue">
      <b>Line {{ i.line }}</b> [{{ i.severity }}] {{ i.message }}
      {% if i.context %}<div class="context">{{ i.context }}</div>{% endif %}
    </div>
    {% endfor %}
    {% for s in r.suggestion_items %}
    <div class="suggestion">
      {{ s.message }}
      {% if s.context %}<div class="context">{{ s.context }}</div>{% endif %}
    </div>
    {% endfor %}
  </div>
  {% endfor %}

  <div class="footer">Dockerfile Blueprint &bull; Generated {{ generated }}</div>

<script>
const reports = {{ reports_json|safe }};
const counts = {valid: 0, invalid: 0};
reports.forEach(r => { counts[r.is_valid ? 'valid' : 'invalid'] += 1; });
new Chart(document.getElementById('verdictChart'), {type: 'doughnut',
  data: {labels: ['valid', 'invalid'], datasets: [{data: [counts.valid, counts.invalid], backgroundColor: ['#22c55e', '#ef4444']}]},
  options: {plugins: {legend: {position: 'bottom', labels: {color: '#cbd5e1'}}}}});

function filter(){
  const q = document.getElementById('searchBox').value.toLowerCase();
  const verdict = document.getElementById('verdictFilter').value;
  document.querySelectorAll('.report').forEach(el => {
    const ok = el.dataset.file.includes(q) && (!verdict || el.dataset.verdict === verdict);
    el.style.display = ok ? 'block' : 'none';
  });
}
document.getElementById('searchBox').addEventListener('input', filter);
document.getElementById('verdictFilter').addEventListener('change', filter);

function exportJSON(){
  const blob = new Blob([JSON.stringify(reports, null, 2)], {type: 'application/json'});
  const a = document.createElement('a'); a.href = URL.createObjectURL(blob); a.download = 'blueprint_report.json'; a.click();
}
</script>
</body>
</html>
"""


def _with_context(report):
    r = dict(report)
    r["issues"] = [dict(i, context=get_context(i.get("message", ""))) for i in report.get("issues", [])]
    r["suggestion_items"] = [{"message": s, "context": get_context(s)} for s in report.get("suggestions", [])]
    return r


def render_html(reports):
    """Render lint report entries (as produced by rules_engine.run_rules)."""
    generated = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
    verdicts = Counter("valid" if r.get("is_valid") else "invalid" for r in reports)
    error_count = sum(1 for r in reports for i in r.get("issues", []) if i.get("severity") == "error")
    suggestion_count = sum(len(r.get("suggestions", [])) for r in reports)

    tpl = Template(HTML_TEMPLATE, autoescape=True)
    return tpl.render(
        generated=generated,
        reports=[_with_context(r) for r in reports],
        reports_json=json.dumps(reports).replace("</", "<\\/"),
        file_count=len(reports),
        valid_count=verdicts.get("valid", 0),
        error_count=error_count,
        suggestion_count=suggestion_count,
    )


def generate_full_html(reports, out_path, open_browser=False):
    """Write the HTML report to ``out_path`` and optionally open it."""
    out_html = render_html(reports)

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(out_html)
    logger.info("HTML report: %s", out_path)

    if open_browser:
        try:
            webbrowser.open(f"file://{os.path.abspath(out_path)}")
        except webbrowser.Error as e:
            logger.warning(f"Failed to auto-open report: {e}")
    return out_path
