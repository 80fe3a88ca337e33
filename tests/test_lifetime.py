import copy
import io

from stdplus.lifetime import Lifetime


def test_construct_and_destroy():
    out = io.StringIO()
    with Lifetime("here", out) as lt:
        assert out.getvalue() == f"Lifetime Construct here {lt.id}\n"
    assert out.getvalue() == (
        f"Lifetime Construct here {lt.id}\nLifetime Destroy here {lt.id}\n"
    )


def test_close_only_once():
    out = io.StringIO()
    lt = Lifetime("here", out)
    lt.close()
    lt.close()
    assert out.getvalue().count("Destroy") == 1


def test_copy_takes_new_id():
    out = io.StringIO()
    lt = Lifetime("here", out)
    dup = copy.copy(lt)
    assert dup.id > lt.id
    assert dup.loc == lt.loc
    assert out.getvalue().splitlines()[-1] == f"Lifetime Copy here {lt.id}->{dup.id}"
    lt.close()
    dup.close()


def test_assign_drops_old_id():
    out = io.StringIO()
    a = Lifetime("a", out)
    b = Lifetime("b", out)
    old = b.id
    b.assign(a)
    assert b.id > a.id and b.id != old
    assert out.getvalue().splitlines()[-1] == f"Lifetime Copy b {a.id}->{b.id} drop {old}"
    a.close()
    b.close()


def test_default_location_is_caller():
    out = io.StringIO()
    lt = Lifetime(stream=out)
    assert "test_lifetime.py:" in lt.loc
    assert lt.loc.endswith("(test_default_location_is_caller)")
    lt.close()