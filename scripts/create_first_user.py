import sys
import os
from sqlmodel import Session, SQLModel

# Add current directory to path
sys.path.append(os.getcwd())

from worksphere.core.errors import ConflictError
from worksphere.db.session import engine
from worksphere.models.user import UserRole
from worksphere.schemas.user import UserCreate
from worksphere.services.users import create_user

def create_initial_user():
    print("--- Initial User Creation ---")

    username = os.environ.get("FIRST_ADMIN_USERNAME", "admin")
    password = os.environ.get("FIRST_ADMIN_PASSWORD", "adminpassword")
    name = "Administrator"

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        print(f"Creating user {username}...")
        try:
            user = create_user(
                session,
                UserCreate(username=username, password=password, name=name, role=UserRole.ADMIN),
            )
        except ConflictError:
            print(f"User {username} already exists.")
            return
        print("Initial user created successfully!")
        print(f"Id: {user.id}")
        print(f"Username: {username}")
        print(f"Role: {user.role}")

if __name__ == "__main__":
    create_initial_user()
