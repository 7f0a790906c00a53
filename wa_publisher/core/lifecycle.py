import asyncio
import sys
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger


# Crash hooks


def _log_uncaught(exc_type, exc_value, exc_traceback) -> None:
    logger.opt(exception=(exc_type, exc_value, exc_traceback)).error(
        "Uncaught exception"
    )


def _log_thread_uncaught(args: threading.ExceptHookArgs) -> None:
    name = args.thread.name if args.thread else "unknown"
    logger.opt(
        exception=(args.exc_type, args.exc_value, args.exc_traceback)
    ).error(f"Uncaught exception in thread {name}")


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    message = context.get("message", "Unhandled exception in event loop")
    exc = context.get("exception")
    if exc is not None:
        logger.opt(exception=exc).error(message)
    else:
        logger.error(message)


def install_crash_handlers() -> None:
    """Log defects raised outside any request instead of dying silently."""
    sys.excepthook = _log_uncaught
    threading.excepthook = _log_thread_uncaught
    asyncio.get_running_loop().set_exception_handler(_log_loop_exception)


# Startup / shutdown


async def _connect(app: FastAPI) -> None:
    try:
        await app.state.broker.connect()
        logger.info("NATS broker connected")
    except Exception as e:
        logger.error(f"NATS broker unavailable: {type(e).__name__}: {e}")


def connect_broker(app: FastAPI) -> asyncio.Task:
    """Connect to NATS in the background. Publishes fail with 500 until it is up."""
    task = asyncio.create_task(_connect(app), name="nats-connect")
    app.state.broker_task = task
    logger.info("Connecting to NATS broker")
    return task


async def close_broker(app: FastAPI) -> None:
    task = getattr(app.state, "broker_task", None)
    if task is not None and not task.done():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    await app.state.broker.close()
    logger.info("NATS broker closed")


def warn_missing_verify_token(app: FastAPI) -> None:
    if not app.state.settings.WEBHOOK_VERIFY_TOKEN:
        logger.warning(
            "WEBHOOK_VERIFY_TOKEN is not set - webhook verification will fail"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle: startup and shutdown."""
    logger.info("Lifespan: Starting up...")

    install_crash_handlers()
    warn_missing_verify_token(app)
    connect_broker(app)

    yield

    logger.info("Lifespan: Shutting down...")
    await close_broker(app)
