from pytest import Item, fixture

from infixrpn import REGISTRY, Registry


@fixture
def registry() -> Registry:
    '''
    Unfrozen copy of the default registry, free to extend.
    '''
    return Registry(REGISTRY)


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
