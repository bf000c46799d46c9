"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Depends,
    File,
    Header,
    HTTPException,
    Query,
    Request,
    UploadFile,
    status,
)
from fastapi.responses import HTMLResponse

from camp_registration.api.models import (
    CertificateFlagUpdate,
    CertificateUrlUpdate,
    CommentUpdate,
    QuestionRequest,
    StatusUpdate,
    TemplateBroadcastRequest,
)
from camp_registration.api.serializers import (
    serialize_event,
    serialize_inquiry,
    serialize_question,
    serialize_registration,
    serialize_stats,
)
from camp_registration.domain.registrations import (
    ApplicationFilter,
    RegistrationStatus,
)

if TYPE_CHECKING:
    from camp_registration.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _application_filter(
    camp_slug: str | None = None,
    application_status: RegistrationStatus | None = Query(
        default=None, alias="status"
    ),
    search: str | None = None,
) -> ApplicationFilter:
    return ApplicationFilter(
        camp_slug=camp_slug, status=application_status, search=search
    )


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/applications", dependencies=[Depends(require_admin)])
async def list_applications(
    request: Request,
    application_filter: ApplicationFilter = Depends(_application_filter),
) -> dict[str, object]:
    """Return applications, newest submission first."""
    container = _container(request)
    applications = container.registration_service.list_applications(
        application_filter
    )
    return {
        "applications": [serialize_registration(item) for item in applications]
    }


@router.get("/applications/stats", dependencies=[Depends(require_admin)])
async def application_stats(
    request: Request,
    application_filter: ApplicationFilter = Depends(_application_filter),
) -> dict[str, object]:
    """Return dashboard counts."""
    container = _container(request)
    stats = container.registration_service.summarize_applications(application_filter)
    return {"stats": serialize_stats(stats)}


@router.get("/applications/{registration_id}", dependencies=[Depends(require_admin)])
async def application_detail(
    registration_id: UUID, request: Request
) -> dict[str, object]:
    """Return one application."""
    container = _container(request)
    registration = container.registration_service.get_registration(registration_id)
    return {"application": serialize_registration(registration)}


@router.put(
    "/applications/{registration_id}/status", dependencies=[Depends(require_admin)]
)
async def update_status(
    registration_id: UUID, payload: StatusUpdate, request: Request
) -> dict[str, object]:
    """Set an application's review status."""
    container = _container(request)
    container.registration_service.set_status(registration_id, payload.status)
    registration = container.registration_service.get_registration(registration_id)
    return {"application": serialize_registration(registration)}


@router.put(
    "/applications/{registration_id}/comment", dependencies=[Depends(require_admin)]
)
async def update_comment(
    registration_id: UUID, payload: CommentUpdate, request: Request
) -> dict[str, object]:
    """Overwrite an application's staff comment."""
    container = _container(request)
    container.registration_service.set_comment(registration_id, payload.comment)
    registration = container.registration_service.get_registration(registration_id)
    return {"application": serialize_registration(registration)}


@router.put(
    "/applications/{registration_id}/certificate",
    dependencies=[Depends(require_admin)],
)
async def update_certificate_flag(
    registration_id: UUID, payload: CertificateFlagUpdate, request: Request
) -> dict[str, object]:
    """Toggle an applicant's certificate eligibility."""
    container = _container(request)
    container.registration_service.set_certificate_flag(
        registration_id, payload.enabled
    )
    registration = container.registration_service.get_registration(registration_id)
    return {"application": serialize_registration(registration)}


@router.put(
    "/applications/{registration_id}/certificate-url",
    dependencies=[Depends(require_admin)],
)
async def update_certificate_url(
    registration_id: UUID, payload: CertificateUrlUpdate, request: Request
) -> dict[str, object]:
    """Set an applicant's certificate URL."""
    container = _container(request)
    container.registration_service.set_certificate_url(
        registration_id, payload.certificate_url
    )
    registration = container.registration_service.get_registration(registration_id)
    return {"application": serialize_registration(registration)}


@router.get(
    "/applications/{registration_id}/events", dependencies=[Depends(require_admin)]
)
async def application_events(
    registration_id: UUID, request: Request, limit: int = 50
) -> dict[str, object]:
    """Return the change history of an application."""
    container = _container(request)
    events = container.audit_service.list_events(registration_id, limit)
    return {"events": [serialize_event(event) for event in events]}


@router.post("/certificates/template", dependencies=[Depends(require_admin)])
async def upload_certificate_template(
    request: Request, template: UploadFile = File(...)
) -> dict[str, object]:
    """Upload a template image and apply it to every application."""
    container = _container(request)
    upload = container.certificate_service.upload_template(
        content=await template.read(),
        filename=template.filename or "template",
        content_type=template.content_type,
    )
    return {"certificate_url": upload.url, "affected": upload.affected}


@router.post("/certificates/broadcast", dependencies=[Depends(require_admin)])
async def broadcast_certificate_template(
    payload: TemplateBroadcastRequest, request: Request
) -> dict[str, object]:
    """Apply an existing template URL to every application in every camp."""
    container = _container(request)
    affected = (
        container.registration_service.broadcast_certificate_template_globally(
            payload.template_url
        )
    )
    return {"certificate_url": payload.template_url, "affected": affected}


@router.put("/certificates/flag", dependencies=[Depends(require_admin)])
async def set_certificate_flag_globally(
    payload: CertificateFlagUpdate, request: Request
) -> dict[str, object]:
    """Set the certificate flag on every application."""
    container = _container(request)
    affected = container.registration_service.set_certificate_flag_globally(
        payload.enabled
    )
    return {"enabled": payload.enabled, "affected": affected}


@router.get("/camps/{slug}/questions", dependencies=[Depends(require_admin)])
async def list_questions(slug: str, request: Request) -> dict[str, object]:
    """Return a camp's form questions."""
    container = _container(request)
    questions = container.question_service.list_questions(slug)
    return {"questions": [serialize_question(question) for question in questions]}


@router.post(
    "/camps/{slug}/questions",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def add_question(
    slug: str, payload: QuestionRequest, request: Request
) -> dict[str, object]:
    """Add a question to a camp's form."""
    container = _container(request)
    question = container.question_service.add_question(slug, payload.to_draft())
    return {"question": serialize_question(question)}


@router.put(
    "/camps/{slug}/questions/{question_id}", dependencies=[Depends(require_admin)]
)
async def update_question(
    slug: str, question_id: UUID, payload: QuestionRequest, request: Request
) -> dict[str, object]:
    """Edit a question."""
    container = _container(request)
    question = container.question_service.update_question(
        question_id, payload.to_draft()
    )
    return {"question": serialize_question(question)}


@router.delete(
    "/camps/{slug}/questions/{question_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_question(slug: str, question_id: UUID, request: Request) -> None:
    """Remove a question."""
    container = _container(request)
    container.question_service.delete_question(question_id)


@router.get("/camps/{slug}/inquiries", dependencies=[Depends(require_admin)])
async def list_inquiries(
    slug: str, request: Request, view: str = "all", search: str = ""
) -> dict[str, object]:
    """Return applicant inquiries for triage."""
    container = _container(request)
    inquiries = container.question_service.list_inquiries(
        slug, view=view, search=search
    )
    return {"inquiries": [serialize_inquiry(inquiry) for inquiry in inquiries]}


@router.post(
    "/camps/{slug}/inquiries/{inquiry_id}/like", dependencies=[Depends(require_admin)]
)
async def toggle_inquiry_like(
    slug: str, inquiry_id: UUID, request: Request
) -> dict[str, object]:
    """Flip an inquiry's liked flag."""
    container = _container(request)
    inquiry = container.question_service.toggle_inquiry_like(inquiry_id)
    return {"inquiry": serialize_inquiry(inquiry)}


@router.post(
    "/camps/{slug}/inquiries/{inquiry_id}/approve",
    dependencies=[Depends(require_admin)],
)
async def toggle_inquiry_approval(
    slug: str, inquiry_id: UUID, request: Request
) -> dict[str, object]:
    """Flip an inquiry's approved flag."""
    container = _container(request)
    inquiry = container.question_service.toggle_inquiry_approval(inquiry_id)
    return {"inquiry": serialize_inquiry(inquiry)}


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal review dashboard that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Camp Registration Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      input, select { padding: 0.4rem 0.6rem; margin-right: 0.5rem; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      table { border-collapse: collapse; width: 100%; }
      td, th { border-bottom: 1px solid #ddd; padding: 0.4rem; text-align: left; }
      .pending { color: #92400e; }
      .approve { color: #166534; }
      .decline { color: #991b1b; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Camp Registration Admin</h1>
    <div class="row">
      <input id="token" type="password" placeholder="X-Admin-Token" />
      <input id="camp" placeholder="camp slug (optional)" />
      <select id="status">
        <option value="">all statuses</option>
        <option value="pending">pending</option>
        <option value="approve">approve</option>
        <option value="decline">decline</option>
      </select>
      <button onclick="loadApplications()">Applications</button>
      <button onclick="loadStats()">Stats</button>
    </div>
    <table>
      <thead>
        <tr><th>Name</th><th>Camp</th><th>Status</th><th>Comment</th><th></th></tr>
      </thead>
      <tbody id="rows"></tbody>
    </table>
    <pre id="output">Ready.</pre>
    <script>
      function headers() {
        return {
          'X-Admin-Token': document.getElementById('token').value,
          'Content-Type': 'application/json'
        };
      }
      function query() {
        const params = new URLSearchParams();
        const camp = document.getElementById('camp').value;
        const status = document.getElementById('status').value;
        if (camp) params.set('camp_slug', camp);
        if (status) params.set('status', status);
        return params.toString();
      }
      async function loadStats() {
        const res = await fetch('/admin/applications/stats?' + query(), {
          headers: headers()
        });
        const output = document.getElementById('output');
        output.textContent = res.ok
          ? JSON.stringify(await res.json(), null, 2)
          : 'Error: ' + res.status;
      }
      async function setStatus(id, status) {
        await fetch('/admin/applications/' + id + '/status', {
          method: 'PUT', headers: headers(), body: JSON.stringify({ status })
        });
        loadApplications();
      }
      async function loadApplications() {
        const res = await fetch('/admin/applications?' + query(), {
          headers: headers()
        });
        const rows = document.getElementById('rows');
        rows.innerHTML = '';
        if (!res.ok) {
          document.getElementById('output').textContent = 'Error: ' + res.status;
          return;
        }
        const data = await res.json();
        for (const app of data.applications) {
          const tr = document.createElement('tr');
          const cells = [
            app.first_name + ' ' + app.last_name + ' (' + app.nickname + ')',
            app.camp_slug, app.status, app.comment || ''
          ];
          cells.forEach((text, index) => {
            const td = document.createElement('td');
            td.textContent = text;
            if (index === 2) td.className = app.status;
            tr.appendChild(td);
          });
          const actions = document.createElement('td');
          ['approve', 'decline', 'pending'].forEach((status) => {
            const button = document.createElement('button');
            button.textContent = status;
            button.onclick = () => setStatus(app.id, status);
            actions.appendChild(button);
          });
          tr.appendChild(actions);
          rows.appendChild(tr);
        }
        document.getElementById('output').textContent =
          data.applications.length + ' applications';
      }
    </script>
  </body>
</html>
"""
