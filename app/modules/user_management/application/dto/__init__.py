from .user_dto import CreateUserDTO, LoginUserDTO, UpdateUserDTO

__all__ = [
    "CreateUserDTO",
    "LoginUserDTO",
    "UpdateUserDTO",
]
