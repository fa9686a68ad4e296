import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Dict, Mapping, Union


@dataclass
class JoinSuccess:
    values: Dict[str, Any]

    ok = True


@dataclass
class JoinFailure:
    name: str
    error: BaseException

    ok = False


JoinResult = Union[JoinSuccess, JoinFailure]


async def join_all(fetches: Mapping[str, Awaitable[Any]]) -> JoinResult:
    """Run named awaitables concurrently and wait for every one of them.

    Nothing is cancelled when a member fails. The result is a failure as soon
    as any member failed, reporting the first failing name in declaration
    order.
    """
    names = list(fetches)
    results = await asyncio.gather(
        *(fetches[name] for name in names), return_exceptions=True
    )
    for name, result in zip(names, results):
        if isinstance(result, Exception):
            return JoinFailure(name=name, error=result)
    return JoinSuccess(values=dict(zip(names, results)))
