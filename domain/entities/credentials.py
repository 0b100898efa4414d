from dataclasses import dataclass

from domain.exceptions import MissingCredentialsError


@dataclass(frozen=True)
class Credentials:
    user: str
    password: str

    @staticmethod
    def create(credentials: dict) -> 'Credentials':
        for field in ("user", "password"):
            if not credentials.get(field):
                raise MissingCredentialsError(f"Missing required credential: {field}")
        return Credentials(user=credentials["user"], password=credentials["password"])
