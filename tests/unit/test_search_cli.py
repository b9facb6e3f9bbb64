from unittest.mock import patch

from search import search_cli


def test_single_query(capsys):
    search_cli.main(["--query", "henning mortensen (f. 1939)"])
    assert capsys.readouterr().out == 'henning and mortensen and "(f. 1939)"\n'


@patch("search.search_cli.TingSearchEngine")
def test_single_query_is_sent(mock_engine, capsys):
    engine = mock_engine.return_value
    engine.search.return_value = ("<searchResponse/>", "harry and potter", 0.25)

    search_cli.main(["--query", "harry potter", "--send"])

    out = capsys.readouterr().out
    assert "CQL: harry and potter" in out
    assert "<searchResponse/>" in out
    engine.close.assert_called_once()


@patch("search.search_cli.TingSearchEngine")
def test_failed_search_is_reported(mock_engine, capsys):
    mock_engine.return_value.search.return_value = (None, "harry and potter", 0.25)

    search_cli.main(["--query", "harry potter", "--send"])

    assert "Search failed" in capsys.readouterr().out


@patch("builtins.input", side_effect=["portland (film)", "   ", "a/b", "exit"])
def test_interactive_loop(mock_input, capsys):
    search_cli.main([])

    out = capsys.readouterr().out
    assert "portland (film)\n" in out
    assert 'a and "/" and b\n' in out
    assert mock_input.call_count == 4
