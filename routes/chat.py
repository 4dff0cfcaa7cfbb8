from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from chat import ChatProxy
from models import ChatReply, ChatRequest, ErrorResponse
from settings import Settings, get_settings
from storage import StudentStore, get_store
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def get_chat_proxy(settings: Settings = Depends(get_settings)) -> ChatProxy:
    return ChatProxy(settings)


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def post_chat(
    payload: Optional[ChatRequest] = None,
    store: StudentStore = Depends(get_store),
    proxy: ChatProxy = Depends(get_chat_proxy),
):
    # a request with no body reads as an empty message
    payload = payload or ChatRequest()
    # the store lock is shared with create/delete, which hold it across a file write
    students = await run_in_threadpool(store.snapshot, proxy.settings.chat_snapshot_limit)
    reply = await proxy.ask(payload.message, students)
    logger.info("POST /chat - replied with %d chars", len(reply))
    return ChatReply(message=reply)
