import io

from sectordisk.cli import main, run
from sectordisk.disk import Disk


def _run(workdir, text):
    out = io.StringIO()
    code = run(io.StringIO(text), out, workdir)
    return code, out.getvalue()


def _make_disk(workdir, sectors=2, size=100):
    return _run(workdir, f"1 d 1 1 1 1 {sectors} {size} 0\n")


def _write_people(workdir):
    (workdir / "people.csv").write_text("name,age\nana,30\nbob,25\n", encoding="utf-8")


def test_exit_immediately(tmp_path):
    code, output = _run(tmp_path, "0\n")
    assert code == 0
    assert output.startswith("===== MENU =====")


def test_end_of_input_stops(tmp_path):
    code, output = _run(tmp_path, "")
    assert code == 0
    assert "Opcion: " in output


def test_invalid_option(tmp_path):
    _, output = _run(tmp_path, "9\nabc\n0\n")
    assert output.count("Opcion invalida.") == 2


def test_create_disk(tmp_path):
    code, output = _make_disk(tmp_path)
    assert code == 0
    assert "Disco 'd' creado exitosamente." in output
    assert (tmp_path / "d/Plato1/Superficie1/Pista1/Bloque1/Sector2.txt").is_file()
    config = (tmp_path / "discos-config.txt").read_text(encoding="utf-8")
    assert config == "d,1,1,1,1,2,100\n"


def test_create_with_invalid_dimension(tmp_path):
    _, output = _run(tmp_path, "1 d x 0\n")
    assert "Valor invalido." in output
    assert not (tmp_path / "discos-config.txt").exists()


def test_information_parts_and_capacity(tmp_path):
    _make_disk(tmp_path)
    _, output = _run(tmp_path, "2 d 1 2 4 0\n")
    assert "Disco 'd' cargado con exito." in output
    assert "Platos: 1" in output
    assert "Sectores por bloque: 2" in output
    assert "Capacidad total (bytes): 200" in output


def test_missing_disk_asks_again(tmp_path):
    _make_disk(tmp_path)
    _, output = _run(tmp_path, "2 nope d 4 0\n")
    assert output.count("El disco no existe. Intente de nuevo.") == 1
    assert "Disco 'd' cargado con exito." in output


def test_unrecorded_disk_reports_error(tmp_path):
    _make_disk(tmp_path)
    (tmp_path / "other").mkdir()
    _, output = _run(tmp_path, "2 other 0\n")
    assert "No se encontro configuracion para el disco 'other'" in output


def test_insert_and_select(tmp_path):
    _make_disk(tmp_path)
    _write_people(tmp_path)
    _, output = _run(tmp_path, "3 d 1 people.csv 2 people 4 0\n")
    assert "Todos los registros han sido insertados." in output
    assert "--- Registros de la relación 'people' ---" in output
    assert "ana|30\nbob|25\n" in output


def test_used_and_free_space(tmp_path):
    _make_disk(tmp_path)
    _write_people(tmp_path)
    _run(tmp_path, "3 d 1 people.csv 4 0\n")
    disk = Disk.load("d", tmp_path)
    _, output = _run(tmp_path, "2 d 3 4 0\n")
    assert f"Espacio ocupado (bytes): {disk.used_bytes()}" in output
    assert f"Espacio libre (bytes): {disk.capacity() - disk.used_bytes()}" in output
    assert disk.used_bytes() == len("ana#30\nbob#25\n")


def test_partial_insert_reported(tmp_path):
    _make_disk(tmp_path, sectors=1, size=7)
    _write_people(tmp_path)
    _, output = _run(tmp_path, "3 d 1 people.csv 4 0\n")
    assert "Se insertaron 1 registros." in output


def test_missing_csv_reported(tmp_path):
    _make_disk(tmp_path)
    _, output = _run(tmp_path, "3 d 1 missing.csv 4 0\n")
    assert "No se pudo abrir el archivo CSV." in output


def test_select_unknown_relation(tmp_path):
    _make_disk(tmp_path)
    _, output = _run(tmp_path, "3 d 2 ghost 4 0\n")
    assert "La relacion 'ghost' no existe en el esquema." in output


def test_conditional_unknown_attribute_returns_to_main_menu(tmp_path):
    _make_disk(tmp_path)
    _write_people(tmp_path)
    _run(tmp_path, "3 d 1 people.csv 4 0\n")
    _, output = _run(tmp_path, "3 d 3 people height > 1 out.csv 0\n")
    assert "El atributo 'height' no existe en la relación." in output
    assert output.rstrip().endswith("Opcion:")
    assert not (tmp_path / "out.csv").exists()


def test_main_uses_workdir(tmp_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 d 1 1 1 1 1 10 0\n"))
    out = io.StringIO()
    monkeypatch.setattr("sys.stdout", out)
    assert main(["--workdir", str(tmp_path)]) == 0
    assert (tmp_path / "discos-config.txt").read_text(encoding="utf-8") == "d,1,1,1,1,1,10\n"