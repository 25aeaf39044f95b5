import os
import logging
from typing import Optional
from contextlib import asynccontextmanager
from urllib.parse import urlencode
from fastapi import FastAPI, Request, Depends, Query, Form
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from prometheus_fastapi_instrumentator import Instrumentator, metrics
from prometheus_client import Counter
from prometheus_fastapi_instrumentator.metrics import Info

# Import from post_frontend modules
from post_frontend.config import HOST, PORT, LOG_LEVEL, LOG_FORMAT, REQUEST_LATENCY_BUCKETS
from post_frontend.api_client import PostApiClient
from post_frontend.card import PostCard
from post_frontend.controller import PostPageController
from post_frontend.errors import PostClientError

# --- 기본 로깅 ---
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)
logger = logging.getLogger('PostFrontendApp')

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SORT_PATTERN = '^(asc|desc)$'


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup resources."""
    # Startup
    app.state.post_client = PostApiClient()
    logger.info(f"Post frontend initialized: backend API at {app.state.post_client.base_url}")
    yield
    # Shutdown
    await app.state.post_client.close()
    logger.info("Post frontend shutdown: posts API session closed")

app = FastAPI(lifespan=lifespan)

# Prometheus 메트릭 설정
# 커스텀 메트릭: status 레이블은 2xx, 4xx, 5xx 형식으로 그룹화
http_requests_total_custom = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ("method", "status"),
)

def http_requests_total_custom_metric(info: Info) -> None:
    # 처리 중 예외가 나면 응답 객체가 없음
    status_code = info.response.status_code if info.response is not None else 500
    status_group = "unknown"
    if 200 <= status_code < 300:
        status_group = "2xx"
    elif 300 <= status_code < 400:
        status_group = "3xx"
    elif 400 <= status_code < 500:
        status_group = "4xx"
    elif 500 <= status_code < 600:
        status_group = "5xx"

    http_requests_total_custom.labels(info.method, status_group).inc()

def configure_metrics(application: FastAPI) -> None:
    """Expose /metrics with the latency histogram and the status-class request counter."""
    try:
        instrumentator = Instrumentator(buckets=REQUEST_LATENCY_BUCKETS)
    except TypeError as exc:
        if "buckets" not in str(exc):
            raise
        # 최신 버전은 생성자에서 buckets를 받지 않음
        instrumentator = Instrumentator()
        instrumentator.add(metrics.latency(buckets=REQUEST_LATENCY_BUCKETS))

    instrumentator.add(http_requests_total_custom_metric)
    instrumentator.instrument(application).expose(application)


configure_metrics(app)

# --- 정적 파일 및 템플릿 설정 ---
templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))
app.mount("/static", StaticFiles(directory=os.path.join(BASE_DIR, "static")), name="static")


def get_post_client(request: Request) -> PostApiClient:
    return request.app.state.post_client


def list_url(search: str, sort: str) -> str:
    params = {'search': search, 'sort': sort} if search else {'sort': sort}
    return f"/?{urlencode(params)}"


def render_page(request: Request, controller: PostPageController, status_code: int = 200, replace_url: bool = False):
    """현재 컨트롤러 상태로 게시물 페이지를 렌더링합니다."""
    context = {
        "page": controller,
        "form": controller.form,
        "cards": controller.cards(),
        "list_url": list_url(controller.search, controller.sort),
        "replace_url": replace_url,
    }
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


async def reload_keeping_error(controller: PostPageController):
    """Reload the list after a failed submission without losing the page error."""
    error = controller.error
    await controller.load_posts()
    if controller.error is None:
        controller.error = error


async def open_edit(controller: PostPageController, client: PostApiClient, post_id: int) -> bool:
    """Open the edit modal through the post's card, fetching the post when it is not in the list."""
    card = controller.find_card(post_id)
    if card is None:
        try:
            post = await client.get_post_by_id(post_id)
        except PostClientError as e:
            logger.error(f"Error loading post {post_id} for editing: {e}")
            controller.error = str(e)
            return False
        card = PostCard(post, on_edit=controller.open_edit)
    card.edit()
    return True


def prepare_controller(client: PostApiClient, search: str, sort: str) -> PostPageController:
    controller = PostPageController(client)
    controller.search = search
    controller.sort = sort
    return controller


def fill_form(controller: PostPageController, name: str, description: str, image_url: str):
    controller.form.name = name
    controller.form.description = description
    controller.form.image_url = image_url


# --- 웹 페이지 ---
@app.get("/")
async def serve_index(
    request: Request,
    search: str = Query(''),
    sort: str = Query('asc', pattern=SORT_PATTERN),
    modal: Optional[str] = Query(None),
    edit: Optional[int] = Query(None),
    client: PostApiClient = Depends(get_post_client),
):
    """게시물 목록 페이지를 렌더링합니다 (검색, 정렬, 생성/수정 모달)."""
    controller = PostPageController(client)
    await controller.apply_query(search, sort)
    if edit is not None:
        await open_edit(controller, client, edit)
    elif modal == 'create':
        controller.open_create()
    return render_page(request, controller)


@app.post("/posts")
async def handle_create_post(
    request: Request,
    name: str = Form(''),
    description: str = Form(''),
    image_url: str = Form('', alias='imageUrl'),
    search: str = Form(''),
    sort: str = Form('asc', pattern=SORT_PATTERN),
    client: PostApiClient = Depends(get_post_client),
):
    controller = prepare_controller(client, search, sort)
    controller.open_create()
    fill_form(controller, name, description, image_url)

    if await controller.submit_form():
        return render_page(request, controller, replace_url=True)

    await reload_keeping_error(controller)
    return render_page(request, controller, status_code=400)


@app.post("/posts/{post_id}")
async def handle_update_post(
    request: Request,
    post_id: int,
    name: str = Form(''),
    description: str = Form(''),
    image_url: str = Form('', alias='imageUrl'),
    search: str = Form(''),
    sort: str = Form('asc', pattern=SORT_PATTERN),
    client: PostApiClient = Depends(get_post_client),
):
    controller = prepare_controller(client, search, sort)
    if not await open_edit(controller, client, post_id):
        await reload_keeping_error(controller)
        return render_page(request, controller, status_code=400)
    fill_form(controller, name, description, image_url)

    if await controller.submit_form():
        return render_page(request, controller, replace_url=True)

    await reload_keeping_error(controller)
    return render_page(request, controller, status_code=400)


@app.post("/posts/{post_id}/delete")
async def handle_delete_post(
    request: Request,
    post_id: int,
    search: str = Form(''),
    sort: str = Form('asc', pattern=SORT_PATTERN),
    client: PostApiClient = Depends(get_post_client),
):
    controller = prepare_controller(client, search, sort)
    if not await controller.delete(post_id):
        await reload_keeping_error(controller)
        return render_page(request, controller, status_code=400)
    return render_page(request, controller, replace_url=True)


@app.get("/health")
async def handle_health():
    """헬스 체크 엔드포인트"""
    return {"status": "ok", "service": "post-frontend"}


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Post Frontend starting on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
