from blockfall.__main__ import main


def test_demo_prints_frame(capsys):
    main(["--seed", "1", "--ticks", "2"])
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 21
    assert out[-1].startswith("playing score=0 level=1 lines=0")
    assert sum(line.count("#") for line in out[:20]) == 4
