"""Member lookup endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aura.api.deps import get_db
from aura.api.errors import missing_parameters, store_error_response, workflow_error_response
from aura.core.workflow import MembershipDirectory
from aura.core.workflow.errors import WorkflowError

router = APIRouter(tags=["members"])


@router.get("/get-default-group")
async def get_default_group(
    userid: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """First group of a member, or an empty object if they have none."""
    if not userid:
        return missing_parameters("Missing userid parameter")
    
    try:
        group = MembershipDirectory(db).default_group(userid)
    except WorkflowError as e:
        return workflow_error_response(e)
    except SQLAlchemyError as e:
        return store_error_response(e)
    
    if group is None:
        return {}
    return {"group": group}
