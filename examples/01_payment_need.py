"""
Example 1: Payment Need

A payment need is created when a message arrives. It halts because the
person's personalia are not known yet; when they arrive the need is
rebuilt, restored from the progress store and resumed.
"""
import asyncio

from stepwise import CaseRunner, CompositeStep, ExecutionContext, InMemoryProgressStore


class PersonDao:
    def insert_person(self, fnr: str) -> bool:
        print(f"  insert person {fnr}")
        return True

    def delete_person(self, fnr: str) -> None:
        print(f"  delete person {fnr}")

    def update_personalia(self, name: str, address: str) -> None:
        print(f"  update personalia: {name}, {address}")


class CreatePersonStep:
    def __init__(self, dao: PersonDao, fnr: str):
        self.dao = dao
        self.fnr = fnr

    def execute(self, context: ExecutionContext) -> bool:
        return self.dao.insert_person(self.fnr)

    def undo(self) -> None:
        self.dao.delete_person(self.fnr)


class FetchPersonaliaStep:
    def __init__(self, dao: PersonDao):
        self.dao = dao
        self.personalia: tuple[str, str] | None = None

    def execute(self, context: ExecutionContext) -> bool:
        if self.personalia is None:
            return False
        self.dao.update_personalia(*self.personalia)
        return True

    def undo(self) -> None:
        pass


class PaymentNeed(CompositeStep):
    def __init__(self, dao: PersonDao, fnr: str):
        super().__init__()
        self.add(CreatePersonStep(dao, fnr))
        self.fetch_personalia = self.add(FetchPersonaliaStep(dao))

    def personalia(self, name: str, address: str) -> None:
        self.fetch_personalia.personalia = (name, address)


async def main():
    dao = PersonDao()
    runner = CaseRunner(InMemoryProgressStore())

    print("Need received")
    outcome = await runner.run("need-1", PaymentNeed(dao, "fnr"))
    print(f"  completed={outcome.completed} progress={outcome.progress}")

    print("Personalia received")
    need = PaymentNeed(dao, "fnr")
    need.personalia("Hello, World", "1337 Computer Road")
    outcome = await runner.run("need-1", need)
    print(f"  completed={outcome.completed} progress={outcome.progress}")

    print("Need cancelled")
    await runner.undo("need-1", PaymentNeed(dao, "fnr"))


if __name__ == "__main__":
    asyncio.run(main())
