import yaml

from expense_tracker.config import DEFAULT_CONFIG, load_config, save_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / 'none.yaml', environ={})
    assert cfg == DEFAULT_CONFIG
    cfg['output_modules']['csv'] = 'changed'
    assert DEFAULT_CONFIG['output_modules']['csv'] != 'changed'


def test_file_values_are_merged_with_defaults(tmp_path):
    path = tmp_path / 'config.yaml'
    with open(path, 'w') as f:
        yaml.safe_dump({'storage_file': 'data/mine.tsv', 'output_modules': {'csv': 'x.Y'}}, f)
    cfg = load_config(path, environ={})
    assert cfg['storage_file'] == 'data/mine.tsv'
    assert cfg['output_modules']['csv'] == 'x.Y'
    assert cfg['output_modules']['excel'] == DEFAULT_CONFIG['output_modules']['excel']
    assert cfg['export_file'] == 'expenses_export.csv'


def test_environment_overrides(tmp_path):
    cfg = load_config(tmp_path / 'none.yaml', environ={
        'EXPENSE_TRACKER_STORE': 'env.tsv',
        'EXPENSE_TRACKER_LOG_LEVEL': 'debug',
    })
    assert cfg['storage_file'] == 'env.tsv'
    assert cfg['log_level'] == 'debug'


def test_save_then_load(tmp_path):
    path = tmp_path / 'nested' / 'config.yaml'
    cfg = load_config(path, environ={})
    cfg['export_file'] = 'out.csv'
    save_config(cfg, path)
    assert load_config(path, environ={})['export_file'] == 'out.csv'
