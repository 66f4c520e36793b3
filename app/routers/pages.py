"""HTML shells for the landing page and the recruiter dashboard.

Both pages are deliberately bare: the form posts to /api/submit and the
dashboard renders /api/recruiter/data client-side.
"""

from __future__ import annotations

import hmac
import html
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from app.core.context import AppContext, get_context

logger = logging.getLogger(__name__)

router = APIRouter()

TURNSTILE_SCRIPT = '<script src="https://challenges.cloudflare.com/turnstile/v0/api.js" async defer></script>'

LANDING_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Resumrr</title>
{turnstile_script}
</head>
<body>
<main>
<h1>Send us your resume</h1>
<form id="intake" enctype="multipart/form-data">
  <label>Name <input name="name" required></label>
  <label>Email <input name="email" type="email" required></label>
  <label>Job title <input name="jobTitle" required></label>
  <label>Resume <input name="resume" type="file" accept=".pdf,.doc,.docx" required></label>
  <div style="position:absolute;left:-10000px" aria-hidden="true">
    <label>Company <input name="company" tabindex="-1" autocomplete="off"></label>
  </div>
  {turnstile_widget}
  <button type="submit">Submit</button>
</form>
<p id="status" role="status"></p>
</main>
<script>
document.getElementById("intake").addEventListener("submit", async (event) => {{
  event.preventDefault();
  const data = new FormData(event.target);
  const token = data.get("cf-turnstile-response");
  if (token) data.set("turnstileToken", token);
  const res = await fetch("/api/submit", {{ method: "POST", body: data }});
  const body = await res.json().catch(() => ({{}}));
  document.getElementById("status").textContent =
    res.ok ? "Thanks! Your resume was received." : (body.message || "Submission failed");
}});
</script>
</body>
</html>
"""

DASHBOARD_PAGE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="robots" content="noindex, nofollow">
<title>Resumrr - Recruiter</title>
</head>
<body>
<main>
<h1>Recruiter Dashboard</h1>
<p id="updated"></p>
<table>
  <thead><tr>
    <th>Name</th><th>Email</th><th>Job title</th><th>Years</th>
    <th>Credibility</th><th>ATS</th><th>Skills</th><th>Created</th>
  </tr></thead>
  <tbody id="rows"></tbody>
</table>
</main>
<script>
(async () => {
  const res = await fetch("/api/recruiter/data", { cache: "no-store" });
  const body = await res.json().catch(() => ({}));
  if (!res.ok) {
    document.getElementById("updated").textContent = body.message || "Failed to load";
    return;
  }
  document.getElementById("updated").textContent = "Updated " + body.updatedAt;
  const rows = document.getElementById("rows");
  for (const c of body.data) {
    const tr = document.createElement("tr");
    for (const value of [c.name, c.email, c.jobTitle, c.yearsExperience,
                         c.credibilityScore, c.atsScore, c.skills.join(", "), c.createdAt]) {
      const td = document.createElement("td");
      td.textContent = String(value);
      tr.appendChild(td);
    }
    rows.appendChild(tr);
  }
})();
</script>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def landing_page(ctx: AppContext = Depends(get_context)) -> HTMLResponse:
    site_key = ctx.settings.TURNSTILE_SITE_KEY
    widget = ""
    script = ""
    if site_key:
        widget = f'<div class="cf-turnstile" data-sitekey="{html.escape(site_key, quote=True)}"></div>'
        script = TURNSTILE_SCRIPT
    return HTMLResponse(
        LANDING_TEMPLATE.format(turnstile_script=script, turnstile_widget=widget)
    )


@router.get("/r/{key}", response_class=HTMLResponse, include_in_schema=False)
async def recruiter_dashboard(key: str, ctx: AppContext = Depends(get_context)) -> HTMLResponse:
    """Dashboard shell, reachable only with the exact recruiter key.

    A wrong key is indistinguishable from an unknown route.
    """
    secret = ctx.settings.RECRUITER_KEY
    if not secret or not hmac.compare_digest(key.encode("utf-8"), secret.encode("utf-8")):
        raise HTTPException(status_code=404, detail="Not Found")
    return HTMLResponse(DASHBOARD_PAGE, headers={"X-Robots-Tag": "noindex, nofollow"})
