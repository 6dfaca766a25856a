"""site_crawler.crawler: обход сайта, ограничитель запросов и модели данных."""
