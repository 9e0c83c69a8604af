import logging
import time
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.middleware.sessions import SessionMiddleware
from sqlmodel import Session

from .core.config import settings
from .core.logging import init_logging
from .core.db import engine, init_db
from .core.errors import PlannerError
from .api.routes import router as api_router
from .api.auth import router as auth_router, seed_admin
from .api.recipes import router as recipes_router
from .api.meal_plans import router as meal_plans_router
from .api.shopping_list import router as shopping_list_router

init_logging(settings.LOG_LEVEL)
log = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    docs_url=("/docs" if settings.ENABLE_DOCS else None),
    redoc_url=None,
    openapi_url=("/openapi.json" if settings.ENABLE_DOCS else None),
)

# CORS
allow_origins = ["*"] if settings.CORS_ORIGINS == ["*"] else settings.CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    # Browsers refuse credentialed requests to a wildcard origin
    allow_credentials=allow_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
# Session cookie: HttpOnly, SameSite=Lax, plain HTTP allowed for localhost
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=False,
)

@app.exception_handler(PlannerError)
async def _planner_error(request: Request, exc: PlannerError):
    log.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.detail)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)

@app.on_event("startup")
def _startup():
    init_db()
    with Session(engine) as session:
        seed_admin(session)

@app.get("/")
def read_root():
    return {"ok": True, "app": settings.APP_NAME, "version": app.version}

@app.get("/health")
def health():
    return {"ok": True, "ts": int(time.time())}

# Routers
app.include_router(api_router, prefix="/api/v1")
app.include_router(auth_router, prefix="/api/v1/auth")
app.include_router(recipes_router, prefix="/api/v1")
app.include_router(meal_plans_router, prefix="/api/v1")
app.include_router(shopping_list_router, prefix="/api/v1")

# --- Simple interactive UI at /ui ---
@app.get("/ui", response_class=HTMLResponse)
def ui_page():
    if not settings.ENABLE_DEV_PAGES:
        raise HTTPException(status_code=404)
    return """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Recipe Planner UI</title>
<meta name="viewport" content="width=device-width,initial-scale=1">
<style>
  body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Inter,Arial,sans-serif;margin:0;padding:2rem;background:#0b1020;color:#e6edf3}
  .card{max-width:860px;margin:0 auto;background:#111731;border:1px solid #1f2a44;border-radius:16px;padding:24px;box-shadow:0 10px 30px rgba(0,0,0,.25)}
  h1{margin:0 0 .5rem;font-size:1.6rem}
  .muted{color:#9fb0c3;margin:0 0 1rem}
  input,button{padding:.6rem .8rem;border-radius:10px;border:1px solid #2a3a5c;background:#0f1a33;color:#e6edf3}
  input{width:100%;max-width:280px;margin-right:.5rem}
  button{cursor:pointer}
  .row{display:flex;gap:.5rem;flex-wrap:wrap;margin:.5rem 0}
  pre{background:#0f1a33;border:1px solid #223457;border-radius:8px;padding:.75rem;overflow:auto}
  .grid{display:grid;gap:.75rem;grid-template-columns:repeat(auto-fit,minmax(260px,1fr));margin-top:1rem}
  .box{border:1px solid #223457;border-radius:12px;padding:12px;background:#0f1428}
  label{display:block;font-size:.9rem;margin:.25rem 0 .25rem .1rem;color:#9fb0c3}
</style>
</head>
<body>
  <div class="card">
    <h1>Recipe Planner</h1>
    <p class="muted">Development page. Log in first; requests use the session cookie.</p>

    <div class="grid">
      <div class="box">
        <h3>Login</h3>
        <label>Email</label>
        <input id="email" value="">
        <label>Password</label>
        <input id="password" type="password" value="">
        <div class="row">
          <button onclick="login()">POST /auth/login</button>
        </div>
        <pre id="authOut"></pre>
      </div>

      <div class="box">
        <h3>Meal Plan</h3>
        <label>Start / End</label>
        <input id="start" type="date">
        <input id="end" type="date">
        <label>Recipe id, date, meal type</label>
        <input id="recipeId" value="1">
        <input id="itemDate" type="date">
        <input id="mealType" value="dinner">
        <div class="row">
          <button onclick="createPlan()">POST /mealplans</button>
          <button onclick="listPlans()">GET /mealplans</button>
        </div>
        <pre id="planOut"></pre>
      </div>

      <div class="box">
        <h3>Shopping List</h3>
        <div class="row">
          <button onclick="shoppingList()">GET /shopping-list</button>
        </div>
        <pre id="listOut"></pre>
      </div>
    </div>
  </div>

<script>
const $ = sel => document.querySelector(sel);
const BASE = '/api/v1';
function hdrs(){ const h = new Headers(); h.set('Content-Type','application/json'); return h; }
function show(id, data){ $(id).textContent = typeof data === 'string' ? data : JSON.stringify(data, null, 2); }

async function login(){
  const payload = { email: $('#email').value, password: $('#password').value };
  const res = await fetch(BASE + '/auth/login', { method:'POST', headers: hdrs(), body: JSON.stringify(payload) });
  show('#authOut', await res.json().catch(()=>res.status+' error'));
}
async function createPlan(){
  const payload = {
    startDate: $('#start').value, endDate: $('#end').value,
    items: [{ recipeId: Number($('#recipeId').value), date: $('#itemDate').value, mealType: $('#mealType').value }]
  };
  const res = await fetch(BASE + '/mealplans', { method:'POST', headers: hdrs(), body: JSON.stringify(payload) });
  show('#planOut', res.status === 201 ? 'created' : await res.json().catch(()=>res.status+' error'));
}
async function listPlans(){
  const res = await fetch(BASE + '/mealplans', { headers: hdrs() });
  show('#planOut', await res.json().catch(()=>res.status+' error'));
}
async function shoppingList(){
  const q = new URLSearchParams({ startDate: $('#start').value, endDate: $('#end').value });
  const res = await fetch(BASE + '/shopping-list?' + q, { headers: hdrs() });
  show('#listOut', await res.json().catch(()=>res.status+' error'));
}
</script>
</body>
</html>"""
