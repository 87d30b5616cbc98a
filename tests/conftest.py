from pytest import Item


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Echo every passing assertion with its location, for auditing a run.

    Only fires with enable_assertion_pass_hook set; read it with pytest -rP.
    '''
    location = item.name + ':' + str(lineno)
    print('given', location, str(orig))
    # Last two lines are pytest's full-diff hint, not the explanation.
    print('actual', location,
          '\n'.join(str(expl).splitlines()[:-2]))
