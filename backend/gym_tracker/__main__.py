import uvicorn

from gym_tracker.core.config import get_host, get_port


def main() -> None:
    uvicorn.run("gym_tracker.main:app", host=get_host(), port=get_port())


if __name__ == "__main__":
    main()
