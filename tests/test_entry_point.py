from hearth import App, Res, ResMut, Update, main


def test_main_runs_the_app(monkeypatch):
    monkeypatch.setenv("HEARTH_LOG_LEVEL", "debug")

    def count(i: ResMut[int]):
        i.value += 1

    app = App({"max_frames": 4})
    app.add_resource(0).add_handler(Update, count)
    main(app)

    with app.state.get(Res[int]) as i:
        assert i.value == 4
