from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, status

from ..errors import InvalidStatusError, InvalidTransitionError, NotFoundError
from ..models.common import RecordKind
from ..services.records import Record
from ..services.workflow import set_status
from ..store import MongoStore, get_store
from ..utils.notifications import Notifier, get_notifier

StoreDep = Annotated[MongoStore, Depends(get_store)]
NotifierDep = Annotated[Notifier, Depends(get_notifier)]


async def apply_transition(
    store: MongoStore, notifier: Notifier, kind: RecordKind, record_id: str, new_status: str
) -> Record:
    try:
        return await set_status(store, notifier, kind, record_id, new_status)
    except InvalidStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
