from fastapi import Request
from sqlalchemy.orm import Session

def get_db(request: Request):
    # The session factory is built once in create_app and kept on app.state
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
