from pydantic import BaseModel


class OwnerRegister(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class OwnerLogin(BaseModel):
    email: str = ""
    password: str = ""


class OwnerOut(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class AuthOut(BaseModel):
    message: str
    owner: OwnerOut
    token: str
