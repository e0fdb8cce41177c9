"""
工具层 - AOP装饰器
渲染日志、超时等横切关注点
"""

import asyncio
import functools
import time
from typing import Awaitable, Callable, TypeVar

from ..domain.errors import RenderTimeoutError
from .logger import logger

T = TypeVar("T")


def log_render(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """渲染日志装饰器 - 记录每次渲染的 generation、结果与耗时

    被装饰的协程返回 RenderResult；失败的结果记为 warning，
    异常照常向上抛出。
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> T:
        func_name = func.__qualname__
        start_time = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            elapsed = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"[ContentPreviewer] {func_name} 执行失败，耗时: {elapsed:.1f}ms, 错误: {e}"
            )
            raise

        elapsed = (time.perf_counter() - start_time) * 1000
        generation = getattr(result, "generation", "?")
        fmt = getattr(result, "format", None)
        fmt_name = getattr(fmt, "value", fmt)
        if getattr(result, "success", True):
            logger.debug(
                f"[ContentPreviewer] {func_name} #{generation} ({fmt_name}) 完成，耗时: {elapsed:.1f}ms"
            )
        else:
            logger.warning(
                f"[ContentPreviewer] {func_name} #{generation} ({fmt_name}) 失败，"
                f"耗时: {elapsed:.1f}ms, 错误: {getattr(result, 'error_message', '')}"
            )
        return result

    return wrapper


async def run_with_timeout(awaitable: Awaitable[T], timeout_ms: int, label: str) -> T:
    """等待异步任务，超时转换为 RenderTimeoutError"""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        raise RenderTimeoutError(f"{label} 超时 ({timeout_ms}ms)", timeout_ms=timeout_ms)


def with_timeout(timeout_ms: int):
    """超时装饰器，超时抛出 RenderTimeoutError"""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            return await run_with_timeout(func(*args, **kwargs), timeout_ms, func.__qualname__)

        return wrapper

    return decorator
